from fastapi import Header

from resume_optimizer.models.settings import get_settings
from resume_optimizer.services.repositories import get_repositories
from resume_optimizer.services.strategies import get_strategy

__all__ = ["get_user_id", "get_repositories", "get_strategy", "get_settings"]


async def get_user_id(x_user_id: str = Header("anonymous", alias="X-User-Id")) -> str:
    """Caller identity; every stored record is scoped to it."""
    return x_user_id.strip() or "anonymous"
