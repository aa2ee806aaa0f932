"""HTTP API: FastAPI application and lifespan wiring."""
