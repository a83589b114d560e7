"""Users CRUD API - FastAPI service."""
