"""
Dashboard Service - Application Layer

Composes the lighting dashboard: fetches the bridge resources in parallel,
resolves the room and zone hierarchy, computes per-group statistics and
replaces every vendor UUID by a slug.
"""

import asyncio
from typing import Any, Dict, List, Sequence

from homehub.application.services.device_normalizer import enrich_light
from homehub.application.services.slug_mapping_service import SlugMappingService
from homehub.domain.entities.dashboard import Dashboard, DashboardGroup, MotionZone
from homehub.domain.entities.device import Scene
from homehub.domain.entities.service import ServiceOverview
from homehub.domain.gateways.hue_bridge_gateway import IHueBridgeGateway
from homehub.domain.services.hierarchy import (
    BridgeRecord,
    build_group_hierarchy,
    calculate_dashboard_summary,
    calculate_group_stats,
    parse_motion_zones,
    record_name,
    scenes_for_group,
)
from homehub.shared.consts import HUE_ROOM_NAMESPACE, HUE_SCENE_NAMESPACE, HUE_ZONE_NAMESPACE
from homehub.shared.logging import get_logger

logger = get_logger(__name__)


class DashboardService:
    """Builds ``Dashboard`` objects from a lighting bridge gateway."""

    def __init__(self, slug_mapping_service: SlugMappingService) -> None:
        self._slugs = slug_mapping_service

    async def get_dashboard(self, gateway: IHueBridgeGateway) -> Dashboard:
        """
        Fetch and compose the dashboard of one bridge.

        Lights, rooms and devices are required: if any of them fails the
        error is raised once every fetch has settled. Scenes, zones and
        motion zones fall back to empty lists.

        Raises:
            GatewayError: If a required resource cannot be fetched
        """
        logger.info("dashboard.fetch_started")

        lights, rooms, devices, scenes, zones, motion_zones = await asyncio.gather(
            self._required(gateway.get_lights(), "lights"),
            self._required(gateway.get_rooms(), "rooms"),
            self._required(gateway.get_devices(), "devices"),
            self._optional(gateway.get_scenes(), "scenes"),
            self._optional(gateway.get_zones(), "zones"),
            self._fetch_motion_zones(gateway),
        )

        for result in (lights, rooms, devices):
            if isinstance(result, BaseException):
                raise result

        logger.info(
            "dashboard.fetched",
            lights=len(lights),
            rooms=len(rooms),
            zones=len(zones),
            scenes=len(scenes),
            motion_zones=len(motion_zones),
        )

        room_groups = self._build_groups(
            lights, rooms, devices, scenes, HUE_ROOM_NAMESPACE, "room", "Unknown Room"
        )
        zone_groups = self._build_groups(
            lights, zones, devices, scenes, HUE_ZONE_NAMESPACE, "zone", "Unknown Zone"
        )
        summary = calculate_dashboard_summary(
            lights, room_count=len(room_groups), scene_count=len(scenes)
        )

        logger.info(
            "dashboard.composed",
            lights_on=summary.lights_on,
            total_lights=summary.total_lights,
            rooms=len(room_groups),
            zones=len(zone_groups),
        )
        return Dashboard(
            summary=summary,
            rooms=room_groups,
            zones=zone_groups,
            motion_zones=motion_zones,
        )

    def compose_overview(
        self, dashboard: Dashboard, services: Sequence[ServiceOverview]
    ) -> Dict[str, Any]:
        """Lighting dashboard plus the status of every service."""
        overview = dashboard.to_dict()
        overview["services"] = [service.to_dict() for service in services]
        return overview

    def _build_groups(
        self,
        lights: List[BridgeRecord],
        groups: List[BridgeRecord],
        devices: List[BridgeRecord],
        scenes: List[BridgeRecord],
        namespace: str,
        group_type: str,
        default_name: str,
    ) -> List[DashboardGroup]:
        result = []
        for membership in build_group_hierarchy(lights, groups, devices, default_name):
            group_scenes = [
                Scene(
                    id=self._slugs.get_slug(
                        HUE_SCENE_NAMESPACE,
                        scene["id"],
                        record_name(scene, "Unknown Scene"),
                    ),
                    name=record_name(scene, "Unknown Scene"),
                )
                for scene in scenes_for_group(scenes, membership.vendor_id, group_type)
            ]
            result.append(
                DashboardGroup(
                    id=self._slugs.get_slug(
                        namespace, membership.vendor_id, membership.name
                    ),
                    name=membership.name,
                    stats=calculate_group_stats(membership.lights),
                    lights=[enrich_light(light, self._slugs) for light in membership.lights],
                    scenes=group_scenes,
                    vendor_id=membership.vendor_id,
                )
            )
        return sorted(result, key=lambda group: group.name)

    async def _fetch_motion_zones(self, gateway: IHueBridgeGateway) -> List[MotionZone]:
        behaviors, areas = await asyncio.gather(
            self._optional(gateway.get_resource("behavior_instance"), "behaviors"),
            self._optional(
                gateway.get_resource("convenience_area_motion"), "motion_areas"
            ),
        )
        return parse_motion_zones(behaviors, areas)

    @staticmethod
    async def _required(fetch, resource: str):
        try:
            return await fetch
        except Exception as e:
            logger.error("dashboard.fetch_failed", resource=resource, error=str(e))
            return e

    @staticmethod
    async def _optional(fetch, resource: str) -> List[BridgeRecord]:
        try:
            return await fetch
        except Exception as e:
            logger.warning(
                "dashboard.optional_fetch_failed", resource=resource, error=str(e)
            )
            return []
