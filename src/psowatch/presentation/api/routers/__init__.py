from psowatch.presentation.api.routers.supervisors import router as supervisors_router
from psowatch.presentation.api.routers.users import router as users_router

__all__ = [
    "supervisors_router",
    "users_router",
]
