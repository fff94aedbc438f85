"""
Configuration de la base de donnees pour Vitrine.

Ce module fournit :
- Engine SQLAlchemy (SQLite par defaut) avec cles etrangeres actives
- Session factory avec context manager
- Fonction d'initialisation des tables

L'engine est construit par le container depuis VITRINE_DATABASE_URL
(defaut: sqlite:///data/vitrine.db) puis passe explicitement aux fonctions.
"""

from collections.abc import Generator
from pathlib import Path

from sqlalchemy import Engine, event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Active les cles etrangeres SQLite (suppression en cascade des liens)."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(db_url: str) -> Engine:
    """
    Cree un engine pour l'URL donnee.

    Pour SQLite, cree le repertoire parent du fichier et active les cles
    etrangeres a chaque connexion.
    """
    if db_url.startswith("sqlite:///") and db_url not in _MEMORY_URLS:
        db_path = Path(db_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    if db_url in _MEMORY_URLS:
        # Base en memoire partagee par toutes les sessions
        engine = create_engine(
            db_url, echo=False, connect_args=connect_args, poolclass=StaticPool
        )
    else:
        engine = create_engine(db_url, echo=False, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_session(engine: Engine) -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() :
        session = next(get_session(engine))

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(engine) as session:
        yield session


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables manquantes.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from vitrine.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
