"""A JSON web API serving a movie catalogue from an SQL database."""

__version__ = "1.0.0"

__all__ = ["__version__"]