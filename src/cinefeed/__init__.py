"""Daily showtimes feed for Melbourne cinemas."""

__version__ = "0.1.0"
