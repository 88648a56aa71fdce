"""API v1 router aggregator."""

from fastapi import APIRouter

from friendzone.api.v1.endpoints import (
    auth,
    follows,
    friendships,
    posts,
    profiles,
    relationships,
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(profiles.router)
api_router.include_router(posts.router)
api_router.include_router(follows.router)
api_router.include_router(friendships.router)
api_router.include_router(relationships.router)

__all__ = ["api_router"]
