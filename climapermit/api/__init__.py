"""HTTP API over the requirements engine."""

from climapermit.api.app import create_app

__all__ = ["create_app"]
