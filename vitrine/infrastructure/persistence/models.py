"""
Modeles SQLModel pour la base de donnees Vitrine.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- taxonomies: Tags canoniques (kind, label) uniques
- videos: Videos du catalogue
- video_taxonomies: Liens video <-> taxonomie (suppression en cascade)
- quote_requests: Demandes de soumission

Les champs JSON (*_json) stockent des listes ou objets serialises.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlmodel import Field, SQLModel


class TaxonomyModel(SQLModel, table=True):
    """Tag canonique d'une categorie (type, objectif, keyword, style, feel, parametre)."""

    __tablename__ = "taxonomies"
    __table_args__ = (UniqueConstraint("kind", "label", name="uq_taxonomies_kind_label"),)

    id: int | None = Field(default=None, primary_key=True)
    kind: str = Field(index=True)
    label: str


class VideoModel(SQLModel, table=True):
    """
    Video du catalogue.

    external_media_id porte un marqueur "pending:<uuid>" tant que le
    transcodage externe n'a pas fourni la reference definitive.
    """

    __tablename__ = "videos"

    id: int | None = Field(default=None, primary_key=True)
    title: str
    external_media_id: str = Field(index=True)
    status: str = Field(default="pending", index=True)
    thumbnail_offset_seconds: float | None = Field(default=1)
    duration_seconds: int | None = None
    budget_min: int | None = None
    budget_max: int | None = None
    is_featured: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)


class VideoTaxonomyModel(SQLModel, table=True):
    """
    Lien video <-> taxonomie.

    Cle technique propre : l'unicite du couple n'est pas imposee,
    un doublon est sans effet sur le filtrage.
    """

    __tablename__ = "video_taxonomies"

    id: int | None = Field(default=None, primary_key=True)
    video_id: int = Field(
        sa_column=Column(
            Integer, ForeignKey("videos.id", ondelete="CASCADE"), index=True, nullable=False
        )
    )
    taxonomy_id: int = Field(
        sa_column=Column(
            Integer, ForeignKey("taxonomies.id", ondelete="CASCADE"), index=True, nullable=False
        )
    )


class QuoteRequestModel(SQLModel, table=True):
    """Demande de soumission d'un visiteur."""

    __tablename__ = "quote_requests"

    id: int | None = Field(default=None, primary_key=True)
    locale: str = Field(default="fr")
    name: str
    company: str
    email: str = Field(index=True)
    phone: str | None = None
    objectives_json: str = Field(default="[]")
    audiences_json: str = Field(default="[]")
    diffusions_json: str = Field(default="[]")
    description: str | None = None
    locations: str | None = None
    deliverables_json: str = Field(default="{}")
    needs_subtitles: bool | None = None
    upsells_json: str = Field(default="[]")
    budget: str | None = None
    timeline: str | None = None
    referral: str | None = None
    reference_ids_json: str = Field(default="[]")
    project_id: str | None = None
    project_title: str | None = None
    status: str = Field(default="nouvelle", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)

    @staticmethod
    def dump(value: Any) -> str:
        """Serialise une liste ou un objet en JSON."""
        return json.dumps(value, ensure_ascii=False)

    @staticmethod
    def load(raw: str | None, default: Any) -> Any:
        """Deserialise un champ JSON, retourne `default` si vide."""
        if not raw:
            return default
        return json.loads(raw)
