"""API routers for grantflow."""

from . import health
from . import catalog
from . import approvals
from . import requests

__all__ = [
    "health",
    "catalog",
    "approvals",
    "requests",
]
