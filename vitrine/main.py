"""
Point d'entrée CLI de Vitrine.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import import_csv, settings_app, taxonomies
from .config import Settings
from .container import Container
from .logging_config import configure_from_settings

app = typer.Typer(
    name="vitrine",
    help="Catalogue vidéo, recommandations de références et demandes de soumission",
)
container = Container()


# Monter les commandes
app.command(name="import-csv")(import_csv)
app.command()(taxonomies)

# Monter settings_app comme sous-commande
app.add_typer(settings_app, name="settings")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration Vitrine")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Réglages des références : {config.settings_file}")
    typer.echo(f"Administration : {'activée' if config.admin_enabled else 'désactivée'}")
    typer.echo(f"Courriel des demandes : {'activé' if config.email_enabled else 'désactivé'}")
    typer.echo(f"Lots d'import : {config.video_batch_size} vidéos, {config.link_batch_size} liens")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Vitrine v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web Vitrine."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("vitrine.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_from_settings(settings)

    logger.info("Démarrage de Vitrine", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
