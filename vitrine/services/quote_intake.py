"""
Service de reception des demandes de soumission.

Valide les coordonnees minimales (nom, entreprise, courriel), normalise les
champs optionnels, enregistre la demande puis envoie le courriel de
notification si l'envoi est configure. L'echec du courriel n'invalide pas
la demande deja enregistree.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from loguru import logger

from vitrine.core.entities.quote_request import QuoteRequest, QuoteStatus
from vitrine.core.ports.notifier import IEmailSender
from vitrine.core.ports.repositories import IQuoteRequestRepository

EMPTY_VALUE = "—"

EMAIL_SENT = "sent"
EMAIL_SKIPPED = "skipped"
EMAIL_FAILED = "failed"

REQUIRED_FIELDS = ("name", "company", "email")


class MissingFieldsError(ValueError):
    """Coordonnees obligatoires absentes ou vides."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Champs obligatoires manquants: {', '.join(self.missing)}")


@dataclass(frozen=True)
class SubmissionResult:
    """Demande enregistree et statut du courriel (sent, skipped, failed)."""

    request: QuoteRequest
    email_status: str


def _clean_text(value: Any) -> Optional[str]:
    """Chaine nettoyee, None si vide ou absente."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _clean_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item)


def _clean_ids(value: Any) -> tuple[int, ...]:
    """Identifiants de references ; les valeurs non numeriques sont ignorees."""
    ids = []
    for item in _clean_list(value):
        try:
            ids.append(int(item))
        except ValueError:
            continue
    return tuple(ids)


def _join(values: Iterable[Any]) -> str:
    return ", ".join(str(v) for v in values) or EMPTY_VALUE


def build_quote_request(payload: Mapping[str, Any]) -> QuoteRequest:
    """
    Construit la demande a partir du formulaire (cles camelCase).

    Raises:
        MissingFieldsError: Si nom, entreprise ou courriel est absent
    """
    name = _clean_text(payload.get("name"))
    company = _clean_text(payload.get("company"))
    email = _clean_text(payload.get("email"))
    values = {"name": name, "company": company, "email": email}
    missing = [key for key in REQUIRED_FIELDS if not values[key]]
    if missing:
        raise MissingFieldsError(missing)

    deliverables = payload.get("deliverables")
    needs_subtitles = payload.get("needsSubtitles")
    project_id = payload.get("projectId")

    return QuoteRequest(
        locale="en" if payload.get("locale") == "en" else "fr",
        name=name,
        company=company,
        email=email.lower(),
        phone=_clean_text(payload.get("phone")),
        objectives=_clean_list(payload.get("objectives")),
        audiences=_clean_list(payload.get("audiences")),
        diffusions=_clean_list(payload.get("diffusions")),
        description=_clean_text(payload.get("description")),
        locations=_clean_text(payload.get("locations")),
        deliverables=dict(deliverables) if isinstance(deliverables, Mapping) else {},
        needs_subtitles=needs_subtitles if isinstance(needs_subtitles, bool) else None,
        upsells=_clean_list(payload.get("upsells")),
        budget=_clean_text(payload.get("budget")),
        timeline=_clean_text(payload.get("timeline")),
        referral=_clean_text(payload.get("referral")),
        reference_ids=_clean_ids(payload.get("referenceIds")),
        project_id=str(project_id) if project_id not in (None, "") else None,
        project_title=_clean_text(payload.get("projectTitle")),
    )


def build_email_text(request: QuoteRequest) -> str:
    """Corps texte du courriel de notification."""
    if request.needs_subtitles is None:
        subtitles = EMPTY_VALUE
    else:
        subtitles = "Oui" if request.needs_subtitles else "Non"

    lines = [
        "Nouvelle demande de soumission",
        "",
        f"Nom: {request.name}",
        f"Entreprise: {request.company}",
        f"Courriel: {request.email}",
        f"Téléphone: {request.phone or EMPTY_VALUE}",
        f"Langue: {request.locale}",
        "",
        f"Objectifs: {_join(request.objectives)}",
        f"Audiences: {_join(request.audiences)}",
        f"Diffusion: {_join(request.diffusions)}",
        f"Budget: {request.budget or EMPTY_VALUE}",
        f"Échéancier: {request.timeline or EMPTY_VALUE}",
        f"Référence: {request.referral or EMPTY_VALUE}",
        f"Sous-titrage: {subtitles}",
        f"Upsells: {_join(request.upsells)}",
        "",
        f"Description: {request.description or EMPTY_VALUE}",
        f"Lieux: {request.locations or EMPTY_VALUE}",
        f"Références sélectionnées: {_join(request.reference_ids)}",
        f"Projet lié: {request.project_title or request.project_id or EMPTY_VALUE}",
    ]
    return "\n".join(lines)


class QuoteIntakeService:
    """
    Reception et administration des demandes de soumission.

    Attributs injectes:
        repository: Stockage des demandes
        email_sender: Client d'envoi (None : notification desactivee)
        email_from, email_to: Expediteur et destinataire de la notification
    """

    def __init__(
        self,
        repository: IQuoteRequestRepository,
        email_sender: Optional[IEmailSender] = None,
        email_from: str = "",
        email_to: str = "",
    ) -> None:
        self._repository = repository
        self._email_sender = email_sender
        self._email_from = email_from
        self._email_to = email_to

    async def submit(self, payload: Mapping[str, Any]) -> SubmissionResult:
        """
        Enregistre une demande puis notifie par courriel.

        Raises:
            MissingFieldsError: Coordonnees obligatoires manquantes
            sqlalchemy.exc.SQLAlchemyError: Erreur du stockage (propagee)
        """
        request = build_quote_request(payload)
        saved = self._repository.save(request)
        logger.info("Demande de soumission enregistree", request_id=saved.id)

        if self._email_sender is None:
            return SubmissionResult(request=saved, email_status=EMAIL_SKIPPED)

        try:
            await self._email_sender.send(
                sender=self._email_from,
                to=self._email_to,
                subject=f"Nouvelle demande de soumission — {saved.name}",
                text=build_email_text(saved),
            )
        except Exception as e:
            logger.warning("Echec de l'envoi du courriel", request_id=saved.id, error=str(e))
            return SubmissionResult(request=saved, email_status=EMAIL_FAILED)

        return SubmissionResult(request=saved, email_status=EMAIL_SENT)

    def list_requests(self) -> list[QuoteRequest]:
        return self._repository.list_all()

    def set_status(self, request_id: int, status: QuoteStatus | str) -> Optional[QuoteRequest]:
        """Change le statut d'une demande ; None si la demande n'existe pas."""
        updated = self._repository.update_status(request_id, QuoteStatus(status))
        if updated is not None:
            logger.info("Statut de demande modifie", request_id=request_id, status=updated.status.value)
        return updated
