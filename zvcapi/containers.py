from dependency_injector import containers, providers

from zvcapi.config import Settings
from zvcapi.services.auth_service import AuthService
from zvcapi.services.notification_service import NotificationService
from zvcapi.services.redis_service import RedisService
from zvcapi.services.reduced_luck_service import ReducedLuckService
from zvcapi.utils.randomness import SecureRandomSource


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(Settings)


class ServiceModule(containers.DeclarativeContainer):
    """Process-wide services (DB 세션이 필요한 서비스는 zvcapi.deps에서 요청마다 생성)."""

    config = providers.DependenciesContainer()

    redis_service = providers.Singleton(RedisService, settings=config.config)
    random_source = providers.Singleton(SecureRandomSource)
    notification_service = providers.Singleton(NotificationService, settings=config.config)
    reduced_luck_service = providers.Singleton(
        ReducedLuckService, redis_service=redis_service, settings=config.config
    )
    auth_service = providers.Singleton(
        AuthService, redis_service=redis_service, settings=config.config
    )


class Container(containers.DeclarativeContainer):
    """Application container."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "zvcapi.deps",
            "zvcapi.core.auth_middleware",
            "zvcapi.routers.health_router",
            "zvcapi.routers.admin_router",
        ],
    )

    config = providers.Container(ConfigModule)
    services = providers.Container(ServiceModule, config=config)
