import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasket.application.use_cases.notifications import (
    DueDateScanner,
    upcoming_policy,
    urgent_policy,
)
from tasket.config import get_settings
from tasket.infrastructure.database import SessionLocal, engine, initialize_database
from tasket.infrastructure.realtime import RealtimeHub
from tasket.infrastructure.scheduler import ReminderScheduler
from tasket.infrastructure.stores import (
    JWTIdentityResolver,
    SqlAlchemyNotificationStore,
    SqlAlchemyTaskQuery,
)
from tasket.interfaces.api.routes import register_routes
from tasket.logging_setup import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables, wire the realtime hub and reminder jobs, tear down on exit."""

    settings = get_settings()
    initialize_database()

    hub = RealtimeHub(JWTIdentityResolver(SessionLocal))
    scanner = DueDateScanner(
        SqlAlchemyTaskQuery(SessionLocal),
        SqlAlchemyNotificationStore(SessionLocal),
        hub.fanout,
        upcoming=upcoming_policy(settings.upcoming_horizon_days),
        urgent=urgent_policy(settings.urgent_horizon_hours),
    )
    scheduler = ReminderScheduler(scanner, settings)

    app.state.realtime_hub = hub
    app.state.due_date_scanner = scanner
    app.state.reminder_scheduler = scheduler

    if settings.enable_scheduler:
        scheduler.start()
    else:
        logger.info("Reminder scheduler disabled via settings (ENABLE_SCHEDULER=False)")

    try:
        yield
    finally:
        scheduler.shutdown()
        await hub.shutdown()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Tasket realtime", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
