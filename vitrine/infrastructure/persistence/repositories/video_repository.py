"""
Implementation SQLModel des repositories Video et VideoTaxonomy.
"""

from typing import Optional

from sqlmodel import Session, select

from vitrine.core.entities.taxonomy import VideoTaxonomy
from vitrine.core.entities.video import PENDING_MEDIA_PREFIX, Video, VideoStatus
from vitrine.core.ports.repositories import IVideoRepository, IVideoTaxonomyRepository
from vitrine.infrastructure.persistence.models import VideoModel, VideoTaxonomyModel


class SQLModelVideoRepository(IVideoRepository):
    """
    Repository SQLModel pour les videos du catalogue.

    Implemente IVideoRepository avec conversion bidirectionnelle
    entre l'entite Video (domaine) et VideoModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: VideoModel) -> Video:
        return Video(
            id=model.id,
            title=model.title,
            external_media_id=model.external_media_id,
            status=VideoStatus(model.status),
            thumbnail_offset_seconds=model.thumbnail_offset_seconds,
            duration_seconds=model.duration_seconds,
            budget_min=model.budget_min,
            budget_max=model.budget_max,
            is_featured=model.is_featured,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Video) -> VideoModel:
        model = VideoModel(
            title=entity.title,
            external_media_id=entity.external_media_id,
            status=entity.status.value,
            thumbnail_offset_seconds=entity.thumbnail_offset_seconds,
            duration_seconds=entity.duration_seconds,
            budget_min=entity.budget_min,
            budget_max=entity.budget_max,
            is_featured=entity.is_featured,
        )
        if entity.created_at is not None:
            model.created_at = entity.created_at
        return model

    def list_all(self) -> list[Video]:
        """Liste les videos, les plus recentes en premier."""
        statement = select(VideoModel).order_by(
            VideoModel.created_at.desc(), VideoModel.id.desc()
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def get_by_id(self, video_id: int) -> Optional[Video]:
        model = self._session.get(VideoModel, video_id)
        return self._to_entity(model) if model else None

    def bulk_insert(self, videos: list[Video]) -> list[tuple[int, str]]:
        """
        Insere un lot de videos en une transaction.

        Retourne les paires (id, external_media_id) permettant de retrouver
        chaque ligne source par son marqueur provisoire.
        """
        models = [self._to_model(video) for video in videos]
        self._session.add_all(models)
        self._session.commit()
        for model in models:
            self._session.refresh(model)
        return [(model.id, model.external_media_id) for model in models]

    def set_featured(self, video_id: int, is_featured: bool) -> Optional[Video]:
        model = self._session.get(VideoModel, video_id)
        if model is None:
            return None
        model.is_featured = is_featured
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def set_media(self, video_id: int, external_media_id: str) -> Optional[Video]:
        """Rattache le media heberge ; un marqueur provisoire remet la video en attente."""
        model = self._session.get(VideoModel, video_id)
        if model is None:
            return None
        model.external_media_id = external_media_id
        if external_media_id.startswith(PENDING_MEDIA_PREFIX):
            model.status = VideoStatus.PENDING.value
        else:
            model.status = VideoStatus.READY.value
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)


class SQLModelVideoTaxonomyRepository(IVideoTaxonomyRepository):
    """Repository SQLModel pour les liens video <-> taxonomie."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[VideoTaxonomy]:
        models = self._session.exec(select(VideoTaxonomyModel)).all()
        return [
            VideoTaxonomy(video_id=model.video_id, taxonomy_id=model.taxonomy_id)
            for model in models
        ]

    def bulk_insert(self, links: list[VideoTaxonomy]) -> int:
        """Insere un lot de liens sans dedoublonnage."""
        self._session.add_all(
            [
                VideoTaxonomyModel(video_id=link.video_id, taxonomy_id=link.taxonomy_id)
                for link in links
            ]
        )
        self._session.commit()
        return len(links)

    def _select_link(self, video_id: int, taxonomy_id: int):
        return select(VideoTaxonomyModel).where(
            VideoTaxonomyModel.video_id == video_id,
            VideoTaxonomyModel.taxonomy_id == taxonomy_id,
        )

    def add(self, video_id: int, taxonomy_id: int) -> bool:
        if self._session.exec(self._select_link(video_id, taxonomy_id)).first() is not None:
            return False
        self._session.add(VideoTaxonomyModel(video_id=video_id, taxonomy_id=taxonomy_id))
        self._session.commit()
        return True

    def remove(self, video_id: int, taxonomy_id: int) -> int:
        """Supprime toutes les lignes du couple, y compris les doublons d'import."""
        models = self._session.exec(self._select_link(video_id, taxonomy_id)).all()
        for model in models:
            self._session.delete(model)
        self._session.commit()
        return len(models)
