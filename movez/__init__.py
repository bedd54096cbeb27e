"""Movie listing web server backed by the TMDB API and a SQLite cache."""

__version__ = "0.1.0"

__all__ = ["__version__"]