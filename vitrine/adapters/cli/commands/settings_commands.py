"""
Commandes CLI des reglages de recommandation (settings show, reset, load).
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer

from vitrine.adapters.cli.helpers import console, fail, with_container
from vitrine.infrastructure.persistence.settings_store import InvalidSettingsDocument

# Application Typer pour les reglages
settings_app = typer.Typer(
    name="settings",
    help="Reglages du moteur de recommandation",
    rich_markup_mode="rich",
)


@settings_app.command("show")
def settings_show() -> None:
    """Affiche le document de reglages courant (JSON)."""
    asyncio.run(_settings_show_async())


@with_container(requires_db=False)
async def _settings_show_async(container) -> None:
    store = container.settings_store()
    try:
        document = store.load_document()
    except (json.JSONDecodeError, InvalidSettingsDocument) as e:
        fail(f"Document de reglages illisible ({store.path}): {e}")
    typer.echo(json.dumps(document, ensure_ascii=False, indent=2))


@settings_app.command("reset")
def settings_reset() -> None:
    """Restaure les reglages par defaut."""
    asyncio.run(_settings_reset_async())


@with_container(requires_db=False)
async def _settings_reset_async(container) -> None:
    store = container.settings_store()
    settings = store.reset()
    console.print(f"[green]Reglages par defaut restaures[/green] (version {settings.version})")


@settings_app.command("load")
def settings_load(
    file: Annotated[Path, typer.Argument(help="Document JSON a enregistrer")],
) -> None:
    """Remplace le document de reglages par le contenu d'un fichier JSON."""
    asyncio.run(_settings_load_async(file))


@with_container(requires_db=False)
async def _settings_load_async(container, file: Path) -> None:
    if not file.is_file():
        fail(f"Fichier introuvable: {file}")
    try:
        document = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        fail(f"JSON invalide: {e}")

    store = container.settings_store()
    try:
        settings = store.save(document)
    except InvalidSettingsDocument as e:
        fail(str(e))
    console.print(f"[green]Reglages enregistres[/green] (version {settings.version})")
