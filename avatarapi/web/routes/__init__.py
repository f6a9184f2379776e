"""Avatar API route modules.

Each module exports a `router` object (APIRouter instance) that
`avatarapi.web.app.create_app()` includes.

Usage:
    from avatarapi.web.routes import settings
    app.include_router(settings.router)
"""

from avatarapi.web.routes import (
    health,
    items,
    settings,
    slots,
)

__all__ = [
    "health",
    "items",
    "settings",
    "slots",
]
