"""REST API presentation layer for psowatch.

Structure:
    api/
    ├── app.py          # FastAPI application factory
    ├── config.py       # API configuration
    ├── dependencies.py # Dependency injection
    ├── routers/        # API route handlers
    └── schemas/        # Pydantic request/response schemas
"""

from psowatch.presentation.api.app import create_app

__all__ = ["create_app"]
