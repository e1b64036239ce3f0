"""HTTP application: routes, handlers and CORS handling."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from flask import Flask, Response, request, send_from_directory

from .jsonutil import RequestBodyError, error_json, read_json, write_json
from .repository import DatabaseRepo

logger = logging.getLogger(__name__)

ALLOWED_ORIGIN = "http://localhost:5173"
ALLOWED_METHODS = "POST, GET, OPTIONS, PUT, PATCH, DELETE"
ALLOWED_HEADERS = "Accept, Content-Type, X-CSRF-Token, Authorization"

_STATUS = {
    "status": "active",
    "message": "Movies Go up and running",
    "version": "1.0.0",
}


def apply_cors(response: Response, method: str) -> Response:
    """Add the CORS headers; preflight requests also get methods and headers."""
    response.headers["Access-Control-Allow-Origin"] = ALLOWED_ORIGIN
    response.headers["Access-Control-Allow-Credentials"] = "true"
    if method == "OPTIONS":
        response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return response


def create_app(repo: DatabaseRepo, static_folder: Union[str, Path] = "static") -> Flask:
    """Build the Flask application serving the movie catalogue from *repo*."""
    app = Flask(__name__, static_folder=None)
    static_root = Path(static_folder).resolve()

    @app.before_request
    def _preflight():
        if request.method == "OPTIONS":
            return Response("", status=200)
        return None

    @app.after_request
    def _cors(response: Response) -> Response:
        return apply_cors(response, request.method)

    @app.get("/")
    def home() -> Response:
        return write_json(_STATUS, 200)

    @app.get("/movies")
    def all_movies() -> Response:
        try:
            movies = repo.all_movies()
        except Exception as exc:
            return error_json(exc)
        return write_json(movies, 200)

    @app.post("/movie")
    def display_movie() -> Response:
        try:
            fields = read_json(request.get_data(), {"id": int})
        except RequestBodyError as exc:
            return error_json(exc, 400)
        try:
            movie = repo.get_movie_by_id(fields.get("id", 0))
        except Exception as exc:
            logger.info("movie lookup failed: %s", exc)
            return error_json("movie not found", 404)
        return write_json(movie, 200)

    @app.get("/static/<path:filename>")
    def static_file(filename: str) -> Response:
        return send_from_directory(static_root, filename)

    return app