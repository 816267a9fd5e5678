"""HTTP API: FastAPI application factory, dependencies and routes."""
