"""
Snapshot comparison for the per-backend change feeds.

Every detector takes the previous and the current snapshot of one backend
and returns only the substructure that differs, as plain serializable data,
or ``None`` when either snapshot is missing or nothing changed.
"""

from typing import Any, Dict, List, Mapping, Optional


def _payload(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def _group_changes(
    previous: List[Any], current: List[Any]
) -> List[Dict[str, Any]]:
    previous_by_id = {}
    for group in previous:
        payload = _payload(group)
        previous_by_id[payload["id"]] = payload

    changed = []
    for group in current:
        payload = _payload(group)
        if previous_by_id.get(payload["id"]) != payload:
            changed.append(payload)
    return changed


def detect_room_changes(
    previous: Optional[Mapping[str, Any]], current: Optional[Mapping[str, Any]]
) -> Optional[Dict[str, Any]]:
    """
    Compare two lighting snapshots.

    A snapshot is ``{"rooms": [...], "zones": [...], "motion_zones": [...]}``
    where every group carries an ``id``. Rooms and zones that were added or
    whose content changed are reported whole; removed groups are not.
    """
    if previous is None or current is None:
        return None

    changes: Dict[str, Any] = {}
    for section in ("rooms", "zones"):
        changed = _group_changes(
            previous.get(section) or [], current.get(section) or []
        )
        if changed:
            changes[section] = changed

    previous_motion = [_payload(zone) for zone in previous.get("motion_zones") or []]
    current_motion = [_payload(zone) for zone in current.get("motion_zones") or []]
    if previous_motion != current_motion:
        changes["motion_zones"] = current_motion

    return changes or None


def detect_heating_changes(
    previous: Optional[Mapping[str, Any]], current: Optional[Mapping[str, Any]]
) -> Optional[Dict[str, Any]]:
    """Report the ``heating`` and ``hotWater`` sections that differ."""
    if previous is None or current is None:
        return None

    changes = {}
    for section in ("heating", "hotWater"):
        if previous.get(section) != current.get(section):
            changes[section] = current.get(section)
    return changes or None


def detect_playback_changes(
    previous: Optional[Mapping[str, Any]], current: Optional[Mapping[str, Any]]
) -> Optional[Dict[str, Any]]:
    """
    Compare two media snapshots (``{"devices": [...], "playback": {...}}``).

    A change is a different track id or a play/pause transition; the delta
    is the current playback state.
    """
    if previous is None or current is None:
        return None

    previous_playback = previous.get("playback") or {}
    current_playback = current.get("playback") or {}
    previous_track = (previous_playback.get("track") or {}).get("id")
    current_track = (current_playback.get("track") or {}).get("id")
    previous_playing = bool(previous_playback.get("isPlaying"))
    current_playing = bool(current_playback.get("isPlaying"))

    if previous_track == current_track and previous_playing == current_playing:
        return None

    return {"playback": current.get("playback")}
