"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

import os
from contextlib import asynccontextmanager
from typing import Iterable

from dependency_injector import containers, providers

from homehub.application.services.change_feed_service import ChangeFeedService
from homehub.application.services.dashboard_service import DashboardService
from homehub.application.services.home_service import HomeService
from homehub.application.services.room_mapping_service import RoomMappingService
from homehub.application.services.service_registry import ServiceRegistry
from homehub.application.services.slug_mapping_service import SlugMappingService
from homehub.application.use_cases.home_use_cases import (
    ActivateSceneUseCase,
    GetDashboardOverviewUseCase,
    GetHomeUseCase,
    GetRoomUseCase,
    UpdateDeviceUseCase,
    UpdateRoomDevicesUseCase,
    UpdateZoneDevicesUseCase,
)
from homehub.application.use_cases.service_use_cases import (
    ConnectServiceUseCase,
    DisconnectServiceUseCase,
    GetServiceStatusUseCase,
    ListServicesUseCase,
    ResetDemoUseCase,
)
from homehub.domain.gateways.service_plugin import IServicePlugin
from homehub.infrastructure.database import MongoDatabase
from homehub.infrastructure.gateways.hive_gateway import HiveGateway
from homehub.infrastructure.gateways.hue_bridge_gateway import HueBridgeGateway
from homehub.infrastructure.gateways.spotify_gateway import SpotifyGateway
from homehub.infrastructure.plugins.hive_plugin import HiveDemoPlugin, HivePlugin
from homehub.infrastructure.plugins.hue_plugin import HueDemoPlugin, HuePlugin
from homehub.infrastructure.plugins.spotify_plugin import (
    SpotifyDemoPlugin,
    SpotifyPlugin,
)
from homehub.infrastructure.repositories.credentials_store import CredentialsStore
from homehub.infrastructure.repositories.json_document_repository import (
    JsonDocumentRepository,
)
from homehub.infrastructure.repositories.memory_document_repository import (
    InMemoryDocumentRepository,
)
from homehub.infrastructure.repositories.mongo_document_repository import (
    MongoDocumentRepository,
)
from homehub.shared import EnumStorageBackend, get_logger

from .config import AppSettings

logger = get_logger(__name__)

SLUG_MAPPINGS_DOCUMENT = "slug_mappings"
ROOM_MAPPINGS_DOCUMENT = "room_mappings"
CREDENTIALS_DOCUMENT = "credentials"


def _enum_value(value):
    return value.value if hasattr(value, "value") else str(value)


def build_registry(
    plugins: Iterable[IServicePlugin], demo_plugins: Iterable[IServicePlugin]
) -> ServiceRegistry:
    """Registry holding every built-in plugin and its demo twin."""
    registry = ServiceRegistry()
    for plugin in plugins:
        registry.register(plugin)
    for plugin in demo_plugins:
        registry.register_demo(plugin)
    return registry


def _document_repository(config, mongo_database, name: str) -> providers.Selector:
    return providers.Selector(
        providers.Callable(_enum_value, config.storage.backend),
        **{
            EnumStorageBackend.FILE.value: providers.Singleton(
                JsonDocumentRepository,
                file_path=providers.Callable(
                    os.path.join, config.storage.data_dir, f"{name}.json"
                ),
            ),
            EnumStorageBackend.MONGO.value: providers.Singleton(
                MongoDocumentRepository,
                mongo_database=mongo_database,
                name=name,
            ),
        },
    )


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.storage.mongo_uri,
        db_name=config.storage.database_name,
    )

    slug_repository = _document_repository(
        config, mongo_database, SLUG_MAPPINGS_DOCUMENT
    )
    room_repository = _document_repository(
        config, mongo_database, ROOM_MAPPINGS_DOCUMENT
    )
    credentials_repository = _document_repository(
        config, mongo_database, CREDENTIALS_DOCUMENT
    )

    credentials_store = providers.Singleton(
        CredentialsStore, repository=credentials_repository
    )

    # Gateways, built per connection from stored credentials
    hue_gateway_factory = providers.Factory(
        HueBridgeGateway,
        verify_ssl=config.hue.verify_ssl,
        timeout=config.hue.timeout,
    )

    hive_gateway_factory = providers.Factory(
        HiveGateway,
        base_url=config.hive.base_url,
        timeout=config.hive.timeout,
    )

    spotify_gateway_factory = providers.Factory(
        SpotifyGateway,
        base_url=config.spotify.base_url,
        timeout=config.spotify.timeout,
    )

    # Application services
    slug_mapping_service = providers.Singleton(
        SlugMappingService, repository=slug_repository
    )

    room_mapping_service = providers.Singleton(
        RoomMappingService, repository=room_repository
    )

    dashboard_service = providers.Singleton(
        DashboardService, slug_mapping_service=slug_mapping_service
    )

    # Demo universe, never persisted
    demo_slug_mapping_service = providers.Singleton(
        SlugMappingService, repository=providers.Singleton(InMemoryDocumentRepository)
    )

    demo_room_mapping_service = providers.Singleton(
        RoomMappingService, repository=providers.Singleton(InMemoryDocumentRepository)
    )

    demo_dashboard_service = providers.Singleton(
        DashboardService, slug_mapping_service=demo_slug_mapping_service
    )

    # Plugins
    hue_plugin = providers.Singleton(
        HuePlugin,
        dashboard_service=dashboard_service,
        slug_mapping_service=slug_mapping_service,
        credentials_store=credentials_store,
        gateway_factory=hue_gateway_factory.provider,
        default_bridge_ip=config.hue.bridge_ip,
        default_app_key=config.hue.app_key,
    )

    hive_plugin = providers.Singleton(
        HivePlugin,
        credentials_store=credentials_store,
        gateway_factory=hive_gateway_factory.provider,
        default_access_token=config.hive.access_token,
    )

    spotify_plugin = providers.Singleton(
        SpotifyPlugin,
        slug_mapping_service=slug_mapping_service,
        credentials_store=credentials_store,
        gateway_factory=spotify_gateway_factory.provider,
        client_id=config.spotify.client_id,
        redirect_uri=config.spotify.redirect_uri,
        default_access_token=config.spotify.access_token,
    )

    hue_demo_plugin = providers.Singleton(
        HueDemoPlugin,
        dashboard_service=demo_dashboard_service,
        slug_mapping_service=demo_slug_mapping_service,
    )

    hive_demo_plugin = providers.Singleton(HiveDemoPlugin)

    spotify_demo_plugin = providers.Singleton(
        SpotifyDemoPlugin, slug_mapping_service=demo_slug_mapping_service
    )

    service_registry = providers.Singleton(
        build_registry,
        plugins=providers.List(hue_plugin, hive_plugin, spotify_plugin),
        demo_plugins=providers.List(
            hue_demo_plugin, hive_demo_plugin, spotify_demo_plugin
        ),
    )

    home_service = providers.Singleton(
        HomeService,
        registry=service_registry,
        room_mapping_service=room_mapping_service,
        default_service_id=config.aggregation.default_service,
        fetch_timeout=config.aggregation.fetch_timeout,
        demo_room_mapping_service=demo_room_mapping_service,
    )

    change_feed_service = providers.Singleton(
        ChangeFeedService, registry=service_registry
    )

    # Application (use cases)
    get_home_use_case = providers.Factory(GetHomeUseCase, home_service=home_service)

    get_room_use_case = providers.Factory(GetRoomUseCase, home_service=home_service)

    update_device_use_case = providers.Factory(
        UpdateDeviceUseCase, home_service=home_service
    )

    activate_scene_use_case = providers.Factory(
        ActivateSceneUseCase, home_service=home_service
    )

    update_room_devices_use_case = providers.Factory(
        UpdateRoomDevicesUseCase, home_service=home_service
    )

    update_zone_devices_use_case = providers.Factory(
        UpdateZoneDevicesUseCase, home_service=home_service
    )

    get_dashboard_overview_use_case = providers.Factory(
        GetDashboardOverviewUseCase,
        registry=service_registry,
        home_service=home_service,
        dashboard_service=dashboard_service,
        lighting_service_id=config.aggregation.default_service,
    )

    list_services_use_case = providers.Factory(
        ListServicesUseCase, home_service=home_service
    )

    connect_service_use_case = providers.Factory(
        ConnectServiceUseCase, registry=service_registry
    )

    disconnect_service_use_case = providers.Factory(
        DisconnectServiceUseCase,
        registry=service_registry,
        change_feed_service=change_feed_service,
    )

    reset_demo_use_case = providers.Factory(
        ResetDemoUseCase, registry=service_registry
    )

    get_service_status_use_case = providers.Factory(
        GetServiceStatusUseCase, change_feed_service=change_feed_service
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


def _uses_mongo(container: AppContainer) -> bool:
    backend = _enum_value(container.config.storage.backend())
    return backend == EnumStorageBackend.MONGO.value


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Prepares the document store, loads the room mappings and runs the
    plugin lifecycle hooks; plugin shutdown runs in reverse order.
    """
    container = get_container()

    mongo_database = container.mongo_database() if _uses_mongo(container) else None
    registry = container.service_registry()
    plugins = registry.get_all(False) + registry.get_all(True)

    try:
        if mongo_database is not None:
            logger.info("container.mongo.ensure_connection")
            await mongo_database.create_indexes()

        container.room_mapping_service().initialize()
        for plugin in plugins:
            await plugin.initialize()

        logger.info(
            "container.resources.initialized",
            plugins=registry.get_ids(),
        )
        yield container

    finally:
        for plugin in reversed(plugins):
            try:
                await plugin.shutdown()
            except Exception as e:
                logger.error(
                    "container.plugin.shutdown_failed",
                    service_id=plugin.service_id,
                    error=str(e),
                )

        if mongo_database is not None:
            logger.info("container.mongo.close")
            mongo_database.close()

        logger.info("container.resources.shutdown")
