"""Public port exports for concrete execution clients."""

from .db_api import DbApiClient

__all__ = ["DbApiClient"]
