"""
Application FastAPI de Vitrine.

Initialise l'application web avec le Container DI et monte les routes
de l'API publique et de l'administration.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..container import Container
from .routes.admin import router as admin_router
from .routes.keywords import router as keywords_router
from .routes.quote_requests import router as quote_requests_router
from .routes.recommendations import router as recommendations_router
from .routes.videos import router as videos_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Construit l'application ; un container préconfiguré peut être fourni (tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise le Container DI au démarrage et ferme le client courriel à l'arrêt."""
        active = container or Container()
        active.database.init()
        app.state.container = active
        yield
        sender = active.email_sender()
        if sender is not None:
            await sender.close()

    app = FastAPI(title="Vitrine", lifespan=lifespan)

    # Routes
    app.include_router(videos_router)
    app.include_router(recommendations_router)
    app.include_router(quote_requests_router)
    app.include_router(keywords_router)
    app.include_router(admin_router)
    return app


app = create_app()
