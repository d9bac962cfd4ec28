"""
Domain Services Package

Pure functions over bridge records and snapshots: group hierarchy and
statistics for the dashboard, and the change detectors used by plugins.
"""

from .change_detection import (
    detect_heating_changes,
    detect_playback_changes,
    detect_room_changes,
)
from .hierarchy import (
    DEFAULT_ON_BRIGHTNESS,
    GroupMembership,
    build_device_light_map,
    build_group_hierarchy,
    calculate_dashboard_summary,
    calculate_group_stats,
    light_is_on,
    parse_motion_zones,
    record_name,
    scenes_for_group,
)

__all__ = [
    "DEFAULT_ON_BRIGHTNESS",
    "GroupMembership",
    "build_device_light_map",
    "build_group_hierarchy",
    "calculate_dashboard_summary",
    "calculate_group_stats",
    "detect_heating_changes",
    "detect_playback_changes",
    "detect_room_changes",
    "light_is_on",
    "parse_motion_zones",
    "record_name",
    "scenes_for_group",
]
