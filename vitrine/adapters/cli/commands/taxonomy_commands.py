"""
Commande CLI de consultation des taxonomies.
"""

import asyncio
from collections import Counter
from typing import Annotated, Optional

import typer
from rich.table import Table

from vitrine.adapters.cli.helpers import console, fail, with_container
from vitrine.core.entities.taxonomy import TaxonomyKind


def taxonomies(
    kind: Annotated[
        Optional[str],
        typer.Option("--kind", "-k", help="Filtrer par categorie (type, objectif, keyword...)"),
    ] = None,
) -> None:
    """Liste les taxonomies du catalogue."""
    asyncio.run(_taxonomies_async(kind))


@with_container()
async def _taxonomies_async(container, kind: Optional[str]) -> None:
    selected: Optional[TaxonomyKind] = None
    if kind:
        try:
            selected = TaxonomyKind(kind)
        except ValueError:
            choices = ", ".join(k.value for k in TaxonomyKind)
            fail(f"Categorie inconnue: {kind} (choix: {choices})")

    items = container.taxonomy_repository().list_all()
    if selected is not None:
        items = [t for t in items if t.kind == selected]

    table = Table(title="Taxonomies")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Categorie", style="cyan")
    table.add_column("Libelle")
    for taxonomy in sorted(items, key=lambda t: (t.kind.value, t.label.lower())):
        table.add_row(str(taxonomy.id), taxonomy.kind.value, taxonomy.label)
    console.print(table)

    counts = Counter(t.kind.value for t in items)
    summary = ", ".join(f"{k}: {n}" for k, n in sorted(counts.items())) or "aucune"
    console.print(f"[bold]Total:[/bold] {len(items)} ({summary})")
