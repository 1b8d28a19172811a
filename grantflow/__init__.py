"""grantflow - approval workflow engine for access-permission grants."""

__version__ = "0.1.0"
