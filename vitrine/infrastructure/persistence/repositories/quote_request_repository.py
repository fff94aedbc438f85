"""
Implementation SQLModel du repository QuoteRequest.
"""

from typing import Optional

from sqlmodel import Session, select

from vitrine.core.entities.quote_request import QuoteRequest, QuoteStatus
from vitrine.core.ports.repositories import IQuoteRequestRepository
from vitrine.infrastructure.persistence.models import QuoteRequestModel


class SQLModelQuoteRequestRepository(IQuoteRequestRepository):
    """
    Repository SQLModel pour les demandes de soumission.

    Les listes et les livrables sont stockes en JSON.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: QuoteRequestModel) -> QuoteRequest:
        load = QuoteRequestModel.load
        return QuoteRequest(
            id=model.id,
            locale=model.locale,
            name=model.name,
            company=model.company,
            email=model.email,
            phone=model.phone,
            objectives=tuple(load(model.objectives_json, [])),
            audiences=tuple(load(model.audiences_json, [])),
            diffusions=tuple(load(model.diffusions_json, [])),
            description=model.description,
            locations=model.locations,
            deliverables=load(model.deliverables_json, {}),
            needs_subtitles=model.needs_subtitles,
            upsells=tuple(load(model.upsells_json, [])),
            budget=model.budget,
            timeline=model.timeline,
            referral=model.referral,
            reference_ids=tuple(load(model.reference_ids_json, [])),
            project_id=model.project_id,
            project_title=model.project_title,
            status=QuoteStatus(model.status),
            created_at=model.created_at,
        )

    def _to_model(self, entity: QuoteRequest) -> QuoteRequestModel:
        dump = QuoteRequestModel.dump
        return QuoteRequestModel(
            locale=entity.locale,
            name=entity.name,
            company=entity.company,
            email=entity.email,
            phone=entity.phone,
            objectives_json=dump(list(entity.objectives)),
            audiences_json=dump(list(entity.audiences)),
            diffusions_json=dump(list(entity.diffusions)),
            description=entity.description,
            locations=entity.locations,
            deliverables_json=dump(entity.deliverables),
            needs_subtitles=entity.needs_subtitles,
            upsells_json=dump(list(entity.upsells)),
            budget=entity.budget,
            timeline=entity.timeline,
            referral=entity.referral,
            reference_ids_json=dump(list(entity.reference_ids)),
            project_id=entity.project_id,
            project_title=entity.project_title,
            status=entity.status.value,
        )

    def save(self, request: QuoteRequest) -> QuoteRequest:
        """Enregistre une nouvelle demande et retourne l'entite avec son ID."""
        model = self._to_model(request)
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)

    def list_all(self) -> list[QuoteRequest]:
        statement = select(QuoteRequestModel).order_by(
            QuoteRequestModel.created_at.desc(), QuoteRequestModel.id.desc()
        )
        return [self._to_entity(model) for model in self._session.exec(statement).all()]

    def update_status(self, request_id: int, status: QuoteStatus) -> Optional[QuoteRequest]:
        """Seul champ modifiable apres creation."""
        model = self._session.get(QuoteRequestModel, request_id)
        if model is None:
            return None
        model.status = QuoteStatus(status).value
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        return self._to_entity(model)
