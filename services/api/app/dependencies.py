"""FastAPI dependency injection."""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import Settings, get_settings
from app.services.alert_lifecycle import AlertLifecycle
from app.services.alert_store import AlertStore
from app.services.notification_dispatcher import NotificationDispatcher, get_notification_dispatcher
from app.services.ocr_service import OCRService, get_ocr_service
from app.services.plate_directory import PlateDirectory
from app.services.profile_service import ProfileService

# Database engine and session factory (initialized in lifespan)
_engine = None
_session_factory = None


def _create_engine(settings: Settings):
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_size=20,
        max_overflow=10,
        pool_pre_ping=True,
    )


def get_session_factory(settings: Settings = Depends(get_settings)):
    global _engine, _session_factory
    if _session_factory is None:
        _engine = _create_engine(settings)
        _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _session_factory


async def get_db(settings: Settings = Depends(get_settings)) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session."""
    factory = get_session_factory(settings)
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_directory(db: AsyncSession = Depends(get_db)) -> PlateDirectory:
    return PlateDirectory(db)


def get_alert_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AlertStore:
    return AlertStore(db, history_limit=settings.history_limit)


def get_dispatcher(settings: Settings = Depends(get_settings)) -> NotificationDispatcher:
    return get_notification_dispatcher(settings)


def get_alert_lifecycle(
    directory: PlateDirectory = Depends(get_directory),
    store: AlertStore = Depends(get_alert_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> AlertLifecycle:
    return AlertLifecycle(
        directory=directory,
        store=store,
        dispatcher=dispatcher,
        enable_leaving_now=settings.enable_leaving_now,
        rate_limit=settings.alert_rate_limit,
        rate_window_seconds=settings.alert_rate_window_seconds,
    )


def get_profile_service(
    db: AsyncSession = Depends(get_db),
    directory: PlateDirectory = Depends(get_directory),
) -> ProfileService:
    return ProfileService(db, directory)


def get_ocr(settings: Settings = Depends(get_settings)) -> OCRService:
    return get_ocr_service(settings)


def init_db(settings: Settings) -> tuple:
    """Initialize database engine and session factory. Called from lifespan."""
    global _engine, _session_factory
    _engine = _create_engine(settings)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine, _session_factory


async def shutdown_db():
    """Dispose of the database engine. Called from lifespan."""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
    _engine = None
    _session_factory = None
