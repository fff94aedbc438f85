"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Inclut les repositories SQLModel, le document de reglages et les services.
"""

from typing import Optional

from dependency_injector import containers, providers

from .adapters.email.resend_client import ResendEmailClient
from .config import Settings
from .infrastructure.persistence.database import build_engine, get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelQuoteRequestRepository,
    SQLModelTaxonomyRepository,
    SQLModelVideoRepository,
    SQLModelVideoTaxonomyRepository,
)
from .infrastructure.persistence.settings_store import JsonSettingsStore
from .services.catalog import CatalogService
from .services.catalog_importer import CatalogImporterService
from .services.quote_intake import QuoteIntakeService
from .services.recommendation import RecommendationEngine


def _build_email_sender(settings: Settings) -> Optional[ResendEmailClient]:
    """Client Resend si une cle est configuree, sinon None (notification desactivee)."""
    if not settings.email_enabled:
        return None
    return ResendEmailClient(api_key=settings.resend_api_key)


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        importer = container.importer_service(dry_run=True)
        catalog = container.catalog_service().load_catalog()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine - construit depuis l'URL de la configuration
    engine = providers.Singleton(build_engine, db_url=config.provided.database_url)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda engine: next(get_session(engine)), engine=engine)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    taxonomy_repository = providers.Factory(
        SQLModelTaxonomyRepository,
        session=session,
    )
    video_repository = providers.Factory(
        SQLModelVideoRepository,
        session=session,
    )
    video_taxonomy_repository = providers.Factory(
        SQLModelVideoTaxonomyRepository,
        session=session,
    )
    quote_request_repository = providers.Factory(
        SQLModelQuoteRequestRepository,
        session=session,
    )

    # Document de reglages - Singleton pour partager le verrou d'ecriture
    settings_store = providers.Singleton(
        JsonSettingsStore,
        path=config.provided.settings_file,
    )

    # Moteur de recommandation (pur, sans etat - Singleton)
    recommendation_engine = providers.Singleton(RecommendationEngine)

    # Client courriel - None si aucune cle Resend
    email_sender = providers.Singleton(_build_email_sender, settings=config)

    # Service d'import du catalogue - Factory car depend de repositories
    # Utiliser: container.importer_service(dry_run=True/False)
    importer_service = providers.Factory(
        CatalogImporterService,
        taxonomy_repo=taxonomy_repository,
        video_repo=video_repository,
        link_repo=video_taxonomy_repository,
        video_batch_size=config.provided.video_batch_size,
        link_batch_size=config.provided.link_batch_size,
    )

    catalog_service = providers.Factory(
        CatalogService,
        taxonomy_repo=taxonomy_repository,
        video_repo=video_repository,
        link_repo=video_taxonomy_repository,
    )

    quote_intake_service = providers.Factory(
        QuoteIntakeService,
        repository=quote_request_repository,
        email_sender=email_sender,
        email_from=config.provided.quote_email_from,
        email_to=config.provided.quote_email_to,
    )
