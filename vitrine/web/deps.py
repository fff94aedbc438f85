"""
Dépendances partagées de l'application web.

Fournit l'accès au Container DI et le contrôle du jeton d'administration.
"""

import secrets
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request

from ..container import Container


def get_container(request: Request) -> Container:
    """Container initialisé par le lifespan de l'application."""
    return request.app.state.container


def require_admin(
    container: Annotated[Container, Depends(get_container)],
    x_admin_token: Annotated[Optional[str], Header()] = None,
) -> None:
    """
    Vérifie l'en-tête X-Admin-Token.

    Toutes les routes d'administration sont refusées si aucun jeton
    n'est configuré.
    """
    config = container.config()
    if not config.admin_enabled or not x_admin_token:
        raise HTTPException(status_code=401, detail="unauthorized")
    if not secrets.compare_digest(x_admin_token, config.admin_token):
        raise HTTPException(status_code=401, detail="unauthorized")


ContainerDep = Annotated[Container, Depends(get_container)]
