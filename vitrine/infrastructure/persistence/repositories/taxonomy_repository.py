"""
Implementation SQLModel du repository Taxonomy.

Implemente ITaxonomyRepository pour la persistance des tags canoniques
et la suppression de leurs liens avec les videos.
"""

from typing import Optional

from sqlmodel import Session, select

from vitrine.core.entities.taxonomy import Taxonomy, TaxonomyKind
from vitrine.core.ports.repositories import ITaxonomyRepository
from vitrine.infrastructure.persistence.models import TaxonomyModel, VideoTaxonomyModel


class SQLModelTaxonomyRepository(ITaxonomyRepository):
    """
    Repository SQLModel pour les taxonomies.

    Convertit entre l'entite Taxonomy (domaine) et TaxonomyModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: TaxonomyModel) -> Taxonomy:
        return Taxonomy(id=model.id, kind=TaxonomyKind(model.kind), label=model.label)

    def list_all(self) -> list[Taxonomy]:
        """Retourne toutes les taxonomies par ordre d'insertion."""
        models = self._session.exec(select(TaxonomyModel).order_by(TaxonomyModel.id)).all()
        return [self._to_entity(model) for model in models]

    def get_by_id(self, taxonomy_id: int) -> Optional[Taxonomy]:
        model = self._session.get(TaxonomyModel, taxonomy_id)
        return self._to_entity(model) if model else None

    def bulk_upsert(self, items: list[tuple[TaxonomyKind, str]]) -> list[Taxonomy]:
        """
        Insere les couples (kind, label) absents et retourne les lignes concernees.

        Un couple deja present (meme kind, meme label exact) est retourne tel quel.
        La transaction est validee en une seule fois.
        """
        results: list[TaxonomyModel] = []
        seen: dict[tuple[str, str], TaxonomyModel] = {}
        for kind, label in items:
            key = (TaxonomyKind(kind).value, label)
            if key in seen:
                continue
            statement = select(TaxonomyModel).where(
                TaxonomyModel.kind == key[0], TaxonomyModel.label == label
            )
            model = self._session.exec(statement).first()
            if model is None:
                model = TaxonomyModel(kind=key[0], label=label)
                self._session.add(model)
            seen[key] = model
            results.append(model)

        self._session.commit()
        for model in results:
            self._session.refresh(model)
        return [self._to_entity(model) for model in results]

    def save(self, taxonomy: Taxonomy) -> Taxonomy:
        """Sauvegarde une taxonomie (insertion ou mise a jour du libelle)."""
        existing = self._session.get(TaxonomyModel, taxonomy.id) if taxonomy.id else None
        if existing:
            existing.kind = taxonomy.kind.value
            existing.label = taxonomy.label
            model = existing
        else:
            model = TaxonomyModel(kind=taxonomy.kind.value, label=taxonomy.label)
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def delete(self, taxonomy_id: int) -> bool:
        """Supprime une taxonomie et toutes ses lignes de jointure."""
        model = self._session.get(TaxonomyModel, taxonomy_id)
        if model is None:
            return False
        links = self._session.exec(
            select(VideoTaxonomyModel).where(VideoTaxonomyModel.taxonomy_id == taxonomy_id)
        ).all()
        for link in links:
            self._session.delete(link)
        self._session.delete(model)
        self._session.commit()
        return True
