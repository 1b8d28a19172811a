"""HTTP API for grantflow."""
