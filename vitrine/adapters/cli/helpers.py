"""
Utilitaires partages pour les commandes CLI de Vitrine.

Ce module fournit :
- console / err_console : instances Rich Console partagees (stdout / stderr)
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- fail : message d'erreur sur stderr puis sortie en code 1
"""

from contextlib import contextmanager
from functools import wraps
from typing import NoReturn

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from vitrine.container import Container

console = Console()
err_console = Console(stderr=True)


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("vitrine")
    try:
        yield
    finally:
        loguru_logger.enable("vitrine")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def fail(message: str) -> NoReturn:
    """Affiche une erreur sur stderr et termine la commande en code 1."""
    err_console.print(f"[red]Erreur:[/red] {message}")
    raise typer.Exit(code=1)
