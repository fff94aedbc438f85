"""
Fixtures pytest partagees pour les tests Vitrine.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des ports repository
- Engine SQLite en memoire et session
- Settings de test avec chemins temporaires
- Container preconfigure (base en memoire, reglages temporaires)
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import MagicMock

import pytest
from dependency_injector import providers
from sqlmodel import Session, SQLModel

from vitrine.config import Settings
from vitrine.container import Container
from vitrine.core.ports.repositories import (
    IQuoteRequestRepository,
    ITaxonomyRepository,
    IVideoRepository,
    IVideoTaxonomyRepository,
)
from vitrine.infrastructure.persistence import models  # noqa: F401
from vitrine.infrastructure.persistence.database import build_engine


@pytest.fixture
def mock_taxonomy_repo() -> MagicMock:
    """Mock de ITaxonomyRepository (repertoire vide par defaut)."""
    mock = MagicMock(spec=ITaxonomyRepository)
    mock.list_all.return_value = []
    mock.bulk_upsert.return_value = []
    return mock


@pytest.fixture
def mock_video_repo() -> MagicMock:
    """Mock de IVideoRepository ; bulk_insert attribue des ids sequentiels."""
    mock = MagicMock(spec=IVideoRepository)
    mock.list_all.return_value = []
    counter = {"next": 1}

    def fake_bulk_insert(videos):
        inserted = []
        for video in videos:
            inserted.append((counter["next"], video.external_media_id))
            counter["next"] += 1
        return inserted

    mock.bulk_insert.side_effect = fake_bulk_insert
    return mock


@pytest.fixture
def mock_link_repo() -> MagicMock:
    """Mock de IVideoTaxonomyRepository ; bulk_insert retourne le nombre de liens."""
    mock = MagicMock(spec=IVideoTaxonomyRepository)
    mock.list_all.return_value = []
    mock.bulk_insert.side_effect = lambda links: len(links)
    return mock


@pytest.fixture
def mock_quote_repo() -> MagicMock:
    return MagicMock(spec=IQuoteRequestRepository)


@pytest.fixture
def engine():
    """Engine SQLite en memoire avec toutes les tables creees."""
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    """Session sur la base en memoire."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings isolees : base en memoire, reglages et logs dans tmp_path."""
    return Settings(
        database_url="sqlite://",
        settings_file=tmp_path / "recommendations-settings.json",
        admin_token="secret-token",
        resend_api_key=None,
        log_file=tmp_path / "logs" / "vitrine.log",
        _env_file=None,
    )


@pytest.fixture
def container(test_settings: Settings) -> Iterator[Container]:
    """Container avec configuration de test et base initialisee."""
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.database.init()
    yield container
    container.shutdown_resources()
    container.reset_singletons()
    container.config.reset_override()
