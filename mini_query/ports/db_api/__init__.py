"""DB-API execution client exports."""

from .client import DbApiClient

__all__ = ["DbApiClient"]
