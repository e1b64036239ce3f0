"""Command-line entry point that starts the API server."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .db import open_db
from .repository import SqlDatabaseRepo
from .server import create_app

logger = logging.getLogger(__name__)

PORT = 8080
DEFAULT_DSN = (
    "host=localhost port=5432 user=user password=password dbname=movies "
    "sslmode=disable timezone=UTC connect_timeout=5"
)


@dataclass
class Config:
    """Settings taken from the command line."""

    dsn: str = DEFAULT_DSN
    jwt_secret: str = "secret"
    jwt_issuer: str = "example.com"
    jwt_audience: str = "example.com"
    cookie_domain: str = "localhost"
    domain: str = "example.com"


def _build_parser() -> argparse.ArgumentParser:
    defaults = Config()
    parser = argparse.ArgumentParser(description="Serve the movie catalogue API.")
    parser.add_argument("-dsn", "--dsn", dest="dsn", default=defaults.dsn,
                        help="Postgres connection string")
    parser.add_argument("-jwt-secret", "--jwt-secret", dest="jwt_secret",
                        default=defaults.jwt_secret, help="signing secret for JWT")
    parser.add_argument("-jwt-issuer", "--jwt-issuer", dest="jwt_issuer",
                        default=defaults.jwt_issuer, help="signing issuer for JWT")
    parser.add_argument("-jwt-audience", "--jwt-audience", dest="jwt_audience",
                        default=defaults.jwt_audience, help="signing audience for JWT")
    parser.add_argument("-cookie-domain", "--cookie-domain", dest="cookie_domain",
                        default=defaults.cookie_domain, help="cookie domain for JWT")
    parser.add_argument("-domain", "--domain", dest="domain",
                        default=defaults.domain, help="domain for JWT")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Config:
    """Parse command-line flags into a Config."""
    namespace = _build_parser().parse_args(argv)
    return Config(**vars(namespace))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to the database and serve the API; return the exit status."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    config = parse_args(argv)
    try:
        engine = open_db(config.dsn)
    except Exception as exc:
        logger.error("%s", exc)
        return 1
    try:
        app = create_app(SqlDatabaseRepo(engine))
        logger.info("Starting application on port: %d", PORT)
        app.run(host="0.0.0.0", port=PORT)
    except Exception as exc:
        logger.error("%s", exc)
        return 1
    finally:
        engine.dispose()
    return 0