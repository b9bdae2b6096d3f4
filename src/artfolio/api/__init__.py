"""HTTP surface - FastAPI application and JWT auth."""

from artfolio.api.app import create_app
from artfolio.api.auth import issue_token

__all__ = ["create_app", "issue_token"]
