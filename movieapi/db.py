"""Opening the database connection."""

from __future__ import annotations

import logging
import re

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url

logger = logging.getLogger(__name__)

_PAIR = re.compile(r"\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*('(?:[^'\\]|\\.)*'|[^\s']+)")
_ESCAPE = re.compile(r"\\(.)")


def _parse_keyword_dsn(dsn: str) -> dict[str, str]:
    settings: dict[str, str] = {}
    pos = 0
    while dsn[pos:].strip():
        match = _PAIR.match(dsn, pos)
        if match is None:
            raise ValueError(f"malformed connection string near {dsn[pos:].strip()!r}")
        key, value = match.groups()
        if value.startswith("'"):
            value = _ESCAPE.sub(r"\1", value[1:-1])
        settings[key] = value
        pos = match.end()
    if not settings:
        raise ValueError("empty connection string")
    return settings


def dsn_to_url(dsn: str) -> URL:
    """Convert a keyword/value connection string (or a URL) into an SQLAlchemy URL."""
    if "://" in dsn:
        return make_url(dsn)
    settings = _parse_keyword_dsn(dsn)
    port = settings.pop("port", None)
    query: dict[str, str] = {}
    timezone = settings.pop("timezone", None)
    options = settings.pop("options", None)
    if timezone is not None:
        tz_option = f"-c timezone={timezone}"
        options = f"{options} {tz_option}" if options else tz_option
    if options:
        query["options"] = options
    username = settings.pop("user", None)
    secret = settings.pop("password", None)
    host = settings.pop("host", None)
    database = settings.pop("dbname", None)
    query.update(settings)
    try:
        port_number = int(port) if port is not None else None
    except ValueError:
        raise ValueError(f"invalid port {port!r}") from None
    return URL.create(
        "postgresql",
        username=username,
        password=secret,
        host=host,
        port=port_number,
        database=database,
        query=query,
    )


def open_db(dsn: str) -> Engine:
    """Create an engine for *dsn* and verify that the database answers."""
    engine = create_engine(dsn_to_url(dsn))
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        engine.dispose()
        raise
    logger.info("Connected to database")
    return engine