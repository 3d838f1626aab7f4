"""
HTTP API module.

FastAPI application factory, routers and dependency providers.
"""
