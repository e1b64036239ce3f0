"""Data access for movies and users."""

from __future__ import annotations

import abc
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from .models import Movie, User

DB_TIMEOUT_SECONDS = 3.0
POSTER_BASE_URL = "http://localhost:8080/static/images/"


class RecordNotFoundError(LookupError):
    """Raised when a requested row does not exist."""


class DatabaseRepo(abc.ABC):
    """Operations the application needs from its storage."""

    @abc.abstractmethod
    def connection(self) -> Any:
        """Return the underlying connection handle."""

    @abc.abstractmethod
    def all_movies(self) -> list[Movie]:
        """Return every movie ordered by title."""

    @abc.abstractmethod
    def get_user_by_email(self, email: str) -> User:
        """Return the user with *email*."""

    @abc.abstractmethod
    def get_user_by_id(self, user_id: int) -> User:
        """Return the user with *user_id*."""

    @abc.abstractmethod
    def get_movie_by_id(self, movie_id: int) -> Movie:
        """Return the movie with *movie_id*."""


def poster_url(poster: str) -> str:
    """Turn a stored poster file name into an absolute URL; empty stays empty."""
    if poster == "":
        return ""
    return POSTER_BASE_URL + poster.strip()


def split_runtime(total_minutes: int) -> tuple[int, int]:
    """Split a runtime in minutes into (hours, minutes), truncating toward zero."""
    hours, minutes = divmod(abs(total_minutes), 60)
    if total_minutes < 0:
        return -hours, -minutes
    return hours, minutes


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


_ALL_MOVIES = text(
    """
    SELECT
        id, title, runtime, imdb, "release", mpaa, description,
        COALESCE(poster, ''), created_at, updated_at
    FROM
        movies
    ORDER BY
        title
    """
)

_USER_COLUMNS = """
    SELECT
        id, email, first_name, last_name, password,
        created_at, updated_at
    FROM
        users
"""

_USER_BY_ID = text(_USER_COLUMNS + " WHERE id = :id")
_USER_BY_EMAIL = text(_USER_COLUMNS + " WHERE email = :email")

_MOVIE_BY_ID = text(
    """
    SELECT
        id, title, runtime, imdb, "release", mpaa, description,
        created_at, updated_at, poster, imdb_id
    FROM
        movies
    WHERE
        id = :id
    """
)


class SqlDatabaseRepo(DatabaseRepo):
    """Repository backed by an SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def connection(self) -> Engine:
        return self._engine

    def all_movies(self) -> list[Movie]:
        with self._engine.connect() as conn:
            rows = conn.execute(_ALL_MOVIES).all()
        movies = []
        for (movie_id, title, runtime, imdb, release, mpaa, description,
             poster, created_at, updated_at) in rows:
            hours, minutes = split_runtime(int(runtime))
            movies.append(
                Movie(
                    id=int(movie_id),
                    title=title,
                    poster=poster_url(poster or ""),
                    runtime_hours=hours,
                    runtime_minutes=minutes,
                    imdb=float(imdb),
                    release=int(release),
                    mpaa=mpaa,
                    description=description,
                    created_at=_to_datetime(created_at),
                    updated_at=_to_datetime(updated_at),
                )
            )
        return movies

    def _fetch_user(self, query: Any, params: dict[str, Any]) -> User:
        with self._engine.connect() as conn:
            row = conn.execute(query, params).first()
        if row is None:
            raise RecordNotFoundError("no user found")
        user_id, email, first_name, last_name, password, created_at, updated_at = row
        return User(
            id=int(user_id),
            email=email,
            first_name=first_name,
            last_name=last_name,
            password=password,
            created_at=_to_datetime(created_at),
            updated_at=_to_datetime(updated_at),
        )

    def get_user_by_id(self, user_id: int) -> User:
        return self._fetch_user(_USER_BY_ID, {"id": user_id})

    def get_user_by_email(self, email: str) -> User:
        return self._fetch_user(_USER_BY_EMAIL, {"email": email})

    def get_movie_by_id(self, movie_id: int) -> Movie:
        with self._engine.connect() as conn:
            row = conn.execute(_MOVIE_BY_ID, {"id": movie_id}).first()
        if row is None:
            raise RecordNotFoundError("no movie found")
        (found_id, title, runtime, imdb, release, mpaa, description,
         created_at, updated_at, poster, imdb_id) = row
        hours, minutes = split_runtime(int(runtime))
        return Movie(
            id=int(found_id),
            title=title,
            poster=poster_url(poster or ""),
            runtime_hours=hours,
            runtime_minutes=minutes,
            imdb=float(imdb),
            imdb_id=imdb_id or "",
            release=int(release),
            mpaa=mpaa,
            description=description,
            created_at=_to_datetime(created_at),
            updated_at=_to_datetime(updated_at),
        )