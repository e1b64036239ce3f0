from datetime import datetime

import pytest
from sqlalchemy import create_engine, text

from movieapi.models import Movie, User
from movieapi.repository import (
    DatabaseRepo,
    RecordNotFoundError,
    SqlDatabaseRepo,
    poster_url,
    split_runtime,
)


@pytest.fixture
def repo(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'movies.db'}")
    with engine.begin() as conn:
        conn.execute(text(
            'CREATE TABLE movies (id INTEGER PRIMARY KEY, title TEXT, runtime INTEGER, '
            'imdb REAL, "release" INTEGER, mpaa TEXT, description TEXT, poster TEXT, '
            'imdb_id TEXT, created_at TEXT, updated_at TEXT)'
        ))
        conn.execute(text(
            "CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT, first_name TEXT, "
            "last_name TEXT, password TEXT, created_at TEXT, updated_at TEXT)"
        ))
        conn.execute(text(
            'INSERT INTO movies VALUES '
            "(1, 'Raiders', 115, 8.4, 1981, 'PG', 'Whip.', ' raiders.jpg\n', 'tt1', "
            "'2024-01-01 10:00:00', '2024-01-02 10:00:00'), "
            "(2, 'Highlander', 116, 7.1, 1986, 'R', 'One.', NULL, 'tt2', "
            "'2024-01-01 10:00:00', '2024-01-02 10:00:00')"
        ))
        conn.execute(text(
            "INSERT INTO users VALUES (5, 'admin@example.com', 'Ada', 'Lovelace', "
            "'password', '2024-01-01 10:00:00', '2024-01-02 10:00:00')"
        ))
    yield SqlDatabaseRepo(engine)
    engine.dispose()


def test_poster_url_prefixes_and_strips():
    assert poster_url(" a.jpg\n") == "http://localhost:8080/static/images/a.jpg"


def test_poster_url_keeps_empty():
    assert poster_url("") == ""


@pytest.mark.parametrize("total", [0, 1, 59, 60, 61, 115, 1000])
def test_split_runtime_recombines(total):
    hours, minutes = split_runtime(total)
    assert hours * 60 + minutes == total
    assert 0 <= minutes < 60


def test_split_runtime_truncates_toward_zero():
    hours, minutes = split_runtime(-61)
    assert hours * 60 + minutes == -61
    assert hours == -1


def test_database_repo_is_abstract():
    with pytest.raises(TypeError):
        DatabaseRepo()


def test_connection_returns_engine(repo):
    with repo.connection().connect() as conn:
        assert conn.execute(text("SELECT COUNT(*) FROM movies")).scalar() == 2


def test_all_movies_ordered_by_title(repo):
    movies = repo.all_movies()
    assert [m.title for m in movies] == ["Highlander", "Raiders"]
    assert all(isinstance(m, Movie) for m in movies)


def test_all_movies_builds_poster_and_runtime(repo):
    by_title = {m.title: m for m in repo.all_movies()}
    raiders = by_title["Raiders"]
    assert raiders.poster == poster_url("raiders.jpg")
    assert raiders.runtime_hours * 60 + raiders.runtime_minutes == 115
    assert by_title["Highlander"].poster == ""
    assert raiders.created_at == datetime(2024, 1, 1, 10, 0, 0)
    assert raiders.imdb_id == ""


def test_get_user_by_email(repo):
    user = repo.get_user_by_email("admin@example.com")
    assert isinstance(user, User)
    assert user.id == 5
    assert user.first_name == "Ada"
    assert user.validate_password("password") is True


def test_get_user_by_id(repo):
    user = repo.get_user_by_id(5)
    assert user.email == "admin@example.com"
    assert user.updated_at == datetime(2024, 1, 2, 10, 0, 0)


def test_missing_user_raises(repo):
    with pytest.raises(RecordNotFoundError):
        repo.get_user_by_email("nobody@example.com")
    with pytest.raises(RecordNotFoundError):
        repo.get_user_by_id(999)


def test_get_movie_by_id(repo):
    movie = repo.get_movie_by_id(1)
    assert movie.title == "Raiders"
    assert movie.imdb_id == "tt1"
    assert movie.release == 1981
    assert movie.poster == poster_url("raiders.jpg")
    assert movie.runtime_hours * 60 + movie.runtime_minutes == 115


def test_missing_movie_raises(repo):
    with pytest.raises(RecordNotFoundError):
        repo.get_movie_by_id(42)