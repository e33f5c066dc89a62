"""Database configuration and session management."""

from urllib.parse import parse_qsl, urlsplit, urlunsplit

import ssl
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import get_settings
from app.logging_config import get_logger

logger = get_logger(__name__)


def _normalize_db_url(url: str):
    """
    Guard against query params that asyncpg rejects.
    Return a tuple: (url_without_query, ssl_bool)
    """
    split = urlsplit(url)
    query = dict(parse_qsl(split.query, keep_blank_values=True))

    ssl_val = query.get("ssl") or None

    if "sslmode" in query:
        sslmode = query.pop("sslmode")
        ssl_val = "false" if sslmode.lower() == "disable" else "true"

    # local development databases run without TLS
    if ssl_val is None:
        ssl_val = "false"

    bare_url = urlunsplit(
        (
            split.scheme,
            split.netloc,
            split.path,
            "",
            split.fragment,
        )
    )

    ssl_bool = str(ssl_val).lower() in ("true", "1", "yes", "require", "verify-ca", "verify-full")
    return bare_url, ssl_bool


settings = get_settings()

bare_url, ssl_enabled = _normalize_db_url(settings.database_url)
logger.info(f"[DB] Using URL: {bare_url.split('@')[-1]} | ssl={ssl_enabled}")

connect_kwargs = {}
if ssl_enabled:
    connect_kwargs["ssl"] = ssl.create_default_context()

engine = create_async_engine(
    bare_url,
    echo=False,
    future=True,
    connect_args=connect_kwargs,
    pool_pre_ping=True,
    pool_recycle=900,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


async def init_db():
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

