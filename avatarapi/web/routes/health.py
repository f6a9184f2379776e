"""Health check routes."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from avatarapi.store.repository import ConfigStore
from avatarapi.web.dependencies import get_store

router = APIRouter(tags=["Health"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    return "Avatar API Server is running."


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(store: ConfigStore = Depends(get_store)):
    """Check application health.

    Reports whether the configuration store is loaded and how many
    teachers it holds. Never loads the store itself.
    """
    if not store.loaded:
        return {"status": "starting", "store": "not_loaded"}
    return {"status": "ok", "store": "loaded", "teachers": len(store)}
