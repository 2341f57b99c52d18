import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from mangum import Mangum
from starlette.middleware.cors import CORSMiddleware

from zvcapi import containers
from zvcapi.config import settings
from zvcapi.core.exception_handlers import register_exception_handlers
from zvcapi.core.logging_middleware import LoggingMiddleware
from zvcapi.logging_config import setup_logging
from zvcapi.routers import (
    admin_router,
    chicken_cross_router,
    coinflip_router,
    health_router,
    ledger_router,
    lucky_wheel_router,
    roulette_router,
    slot_machine_router,
)

load_dotenv("zvcapi/.env")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.APP_NAME} starting ({settings.ENVIRONMENT})")
    yield
    await app.container.services.redis_service().close()  # type: ignore


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.container = containers.Container()  # type: ignore

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    @app.get("/")
    def hello() -> dict:
        return {"message": settings.APP_NAME}

    app.include_router(health_router.router)
    for module in (
        ledger_router,
        slot_machine_router,
        roulette_router,
        lucky_wheel_router,
        chicken_cross_router,
        coinflip_router,
        admin_router,
    ):
        app.include_router(module.router, prefix=settings.API_PREFIX)

    return app


app = create_app()

handler = Mangum(app)
