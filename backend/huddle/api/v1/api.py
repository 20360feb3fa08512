"""API v1 Router Aggregator.

Aggregates all v1 API endpoints into a single router.
"""

from fastapi import APIRouter

from huddle.api.v1.endpoints import auth, channels, conversations, health, members, messages, workspaces

api_router = APIRouter()

# Mount endpoint routers
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(workspaces.router, prefix="/workspaces", tags=["Workspaces"])
api_router.include_router(members.router, tags=["Members"])
api_router.include_router(channels.router, tags=["Channels"])
api_router.include_router(conversations.router, tags=["Conversations"])
api_router.include_router(messages.router, prefix="/messages", tags=["Messages"])
