"""Domain records served by the API."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


class WrongPasswordError(ValueError):
    """Raised when a plain-text password does not match the stored one."""

    def __init__(self, message: str = "wrong password") -> None:
        super().__init__(message)


@dataclass
class Movie:
    """A movie as stored in the catalogue."""

    id: int = 0
    title: str = ""
    poster: str = ""
    runtime_hours: int = 0
    runtime_minutes: int = 0
    imdb: float = 0.0
    imdb_id: str = ""
    release: int = 0
    mpaa: str = ""
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation; timestamps are not exposed."""
        return {
            "id": self.id,
            "title": self.title,
            "poster": self.poster,
            "runtime": self.runtime_hours,
            "runtime_minutes": self.runtime_minutes,
            "imdb": self.imdb,
            "imdbId": self.imdb_id,
            "release": self.release,
            "mpaa": self.mpaa,
            "description": self.description,
        }


@dataclass
class User:
    """A registered user."""

    id: int = 0
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def validate_password(self, plain_text: str) -> bool:
        """Return True if *plain_text* matches; raise WrongPasswordError otherwise."""
        if self.password != plain_text:
            raise WrongPasswordError()
        return True

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation; timestamps are not exposed."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "password": self.password,
        }