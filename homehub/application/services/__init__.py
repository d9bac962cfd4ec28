"""
Application Services Package

Stateful services shared by the use cases: the plugin registry, the slug
and room mapping stores, the home aggregator, the dashboard compositor and
the change feed.
"""

from .change_feed_service import ChangeFeedService
from .dashboard_service import DashboardService
from .home_service import HomeService
from .room_mapping_service import RoomMappingService, ServiceRoomRef
from .service_registry import ServiceRegistry
from .slug_mapping_service import SlugMappingService, generate_slug

__all__ = [
    "ChangeFeedService",
    "DashboardService",
    "HomeService",
    "RoomMappingService",
    "ServiceRegistry",
    "ServiceRoomRef",
    "SlugMappingService",
    "generate_slug",
]
