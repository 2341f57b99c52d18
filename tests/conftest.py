import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tests.fakes import ADMIN_STEAM_ID, FakeRedisService, FixedRandomSource
from zvcapi.config import Settings
from zvcapi.database.session import get_db
from zvcapi.models import Base
from zvcapi.services.auth_service import AuthService
from zvcapi.services.notification_service import NotificationService
from zvcapi.services.reduced_luck_service import ReducedLuckService


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        ADMIN_PLAYER_IDS=[f"{ADMIN_STEAM_ID}@steam"],
        GAMBLING_WINS_WEBHOOK_URL="",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def fake_redis():
    return FakeRedisService()


@pytest.fixture
def rng():
    return FixedRandomSource()


@pytest.fixture
def reduced_luck_service(fake_redis, settings):
    return ReducedLuckService(redis_service=fake_redis, settings=settings)


@pytest.fixture
def notification_service(settings):
    return NotificationService(settings)


@pytest.fixture
def make_service(db_session, settings, rng, reduced_luck_service, notification_service):
    """게임 서비스 생성 헬퍼"""

    def _make(service_class, random_source=None):
        return service_class(
            db=db_session,
            settings=settings,
            random_source=random_source or rng,
            reduced_luck_service=reduced_luck_service,
            notification_service=notification_service,
        )

    return _make


@pytest.fixture
def client(db_session, settings, fake_redis, rng, reduced_luck_service, notification_service):
    """테스트 클라이언트 픽스처 (DB는 sqlite, Redis는 인메모리)"""
    from zvcapi.main import app

    def override_get_db():
        yield db_session

    container = app.container  # type: ignore
    overrides = {
        container.config.config: settings,
        container.services.redis_service: fake_redis,
        container.services.random_source: rng,
        container.services.reduced_luck_service: reduced_luck_service,
        container.services.notification_service: notification_service,
        container.services.auth_service: AuthService(redis_service=fake_redis, settings=settings),
    }
    for provider, instance in overrides.items():
        provider.override(providers.Object(instance))
    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()
    for provider in overrides:
        provider.reset_override()
