"""
Commande CLI d'import du catalogue (import-csv).
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.status import Status
from sqlalchemy.exc import SQLAlchemyError

from vitrine.adapters.cli.helpers import console, fail, suppress_loguru, with_container
from vitrine.services.catalog_importer import CatalogImportError


def import_csv(
    path: Annotated[
        Path,
        typer.Argument(help="Export tableur a importer (CSV, TSV, separateur detecte)"),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Analyse le fichier sans rien ecrire"),
    ] = False,
) -> None:
    """
    Importe un export tableur dans le catalogue video.

    Cree les taxonomies absentes, puis les videos (statut pending, marqueur
    provisoire) et leurs liens de taxonomie. Reimporter un fichier cree
    des videos en double.
    """
    asyncio.run(_import_csv_async(path, dry_run))


@with_container(requires_db=False)
async def _import_csv_async(container, path: Path, dry_run: bool) -> None:
    """Implementation async de la commande import-csv."""
    config = container.config()
    if not config.database_url:
        fail("Base de donnees non configuree (VITRINE_DATABASE_URL).")
    if not path.is_file():
        fail(f"Fichier introuvable: {path}")

    if dry_run:
        console.print("[yellow]Mode dry-run - aucune modification[/yellow]")

    try:
        if not dry_run:
            container.database.init()
        importer = container.importer_service(dry_run=dry_run)
        with suppress_loguru():
            with Status(f"[cyan]Import de {path.name}...", console=console):
                report = importer.run(path)
    except CatalogImportError as e:
        fail(str(e))
    except SQLAlchemyError as e:
        fail(str(e))

    typer.echo(report.summary())
