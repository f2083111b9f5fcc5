"""HTTP API for Storefront (FastAPI)."""
