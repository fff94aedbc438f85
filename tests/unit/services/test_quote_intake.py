"""
Tests pour le service de reception des demandes de soumission.
"""

from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import pytest

from vitrine.core.entities.quote_request import QuoteRequest, QuoteStatus
from vitrine.core.ports.notifier import IEmailSender
from vitrine.services.quote_intake import (
    EMAIL_FAILED,
    EMAIL_SENT,
    EMAIL_SKIPPED,
    MissingFieldsError,
    QuoteIntakeService,
    build_email_text,
    build_quote_request,
)

PAYLOAD = {
    "locale": "en",
    "name": "  Lev Tremblay ",
    "company": "Zéro huit",
    "email": "Lev@ZeroHuit.CA",
    "objectives": ["recrutement"],
    "audiences": ["interne", ""],
    "deliverables": {"publicite": {"count": 2}},
    "needsSubtitles": True,
    "budget": "10000-20000",
    "referenceIds": ["12", "abc", 7],
    "projectTitle": "Campagne printemps",
}


@pytest.fixture
def repository(mock_quote_repo):
    mock_quote_repo.save.side_effect = lambda request: replace(request, id=1)
    return mock_quote_repo


@pytest.fixture
def email_sender():
    sender = AsyncMock(spec=IEmailSender)
    return sender


class TestBuildQuoteRequest:
    """Tests pour build_quote_request."""

    def test_fields_normalized(self):
        request = build_quote_request(PAYLOAD)

        assert request.name == "Lev Tremblay"
        assert request.email == "lev@zerohuit.ca"
        assert request.locale == "en"
        assert request.audiences == ("interne",)
        assert request.reference_ids == (12, 7)
        assert request.needs_subtitles is True
        assert request.phone is None
        assert request.status is QuoteStatus.NEW

    def test_locale_defaults_to_french(self):
        payload = {**PAYLOAD, "locale": "de"}
        assert build_quote_request(payload).locale == "fr"
        assert build_quote_request({k: v for k, v in PAYLOAD.items() if k != "locale"}).locale == "fr"

    def test_all_missing_fields_reported(self):
        with pytest.raises(MissingFieldsError) as exc_info:
            build_quote_request({"name": "Lev", "company": "   "})
        assert exc_info.value.missing == ["company", "email"]

    def test_non_string_fields_treated_as_missing(self):
        with pytest.raises(MissingFieldsError):
            build_quote_request({"name": 42, "company": "Zéro huit", "email": "a@b.ca"})


class TestBuildEmailText:
    def test_placeholders_for_empty_values(self):
        request = QuoteRequest(name="Lev", company="Zéro huit", email="lev@zerohuit.ca")
        text = build_email_text(request)

        assert text.startswith("Nouvelle demande de soumission\n\nNom: Lev\n")
        assert "Téléphone: —" in text
        assert "Objectifs: —" in text
        assert "Sous-titrage: —" in text
        assert "Projet lié: —" in text

    def test_values_rendered(self):
        text = build_email_text(build_quote_request(PAYLOAD))

        assert "Courriel: lev@zerohuit.ca" in text
        assert "Objectifs: recrutement" in text
        assert "Sous-titrage: Oui" in text
        assert "Références sélectionnées: 12, 7" in text
        assert "Projet lié: Campagne printemps" in text


class TestQuoteIntakeService:
    """Tests pour QuoteIntakeService.submit."""

    @pytest.mark.asyncio
    async def test_submit_saves_then_sends(self, repository, email_sender):
        service = QuoteIntakeService(
            repository, email_sender, email_from="site@zerohuit.ca", email_to="lev@zerohuit.ca"
        )

        result = await service.submit(PAYLOAD)

        assert result.email_status == EMAIL_SENT
        assert result.request.id == 1
        repository.save.assert_called_once()
        email_sender.send.assert_awaited_once()
        kwargs = email_sender.send.await_args.kwargs
        assert kwargs["sender"] == "site@zerohuit.ca"
        assert kwargs["to"] == "lev@zerohuit.ca"
        assert kwargs["subject"].endswith("Lev Tremblay")
        assert "Entreprise: Zéro huit" in kwargs["text"]

    @pytest.mark.asyncio
    async def test_email_failure_keeps_saved_request(self, repository, email_sender):
        email_sender.send.side_effect = RuntimeError("resend down")
        service = QuoteIntakeService(repository, email_sender)

        result = await service.submit(PAYLOAD)

        assert result.email_status == EMAIL_FAILED
        repository.save.assert_called_once()

    @pytest.mark.asyncio
    async def test_without_sender_email_skipped(self, repository):
        result = await QuoteIntakeService(repository).submit(PAYLOAD)
        assert result.email_status == EMAIL_SKIPPED

    @pytest.mark.asyncio
    async def test_missing_fields_nothing_saved(self, repository, email_sender):
        service = QuoteIntakeService(repository, email_sender)

        with pytest.raises(MissingFieldsError):
            await service.submit({"name": "Lev"})

        repository.save.assert_not_called()
        email_sender.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, repository, email_sender):
        repository.save.side_effect = RuntimeError("db locked")
        service = QuoteIntakeService(repository, email_sender)

        with pytest.raises(RuntimeError, match="db locked"):
            await service.submit(PAYLOAD)
        email_sender.send.assert_not_awaited()

    def test_set_status(self, repository):
        updated = QuoteRequest(name="Lev", company="Z", email="l@z.ca", id=3, status=QuoteStatus.DONE)
        repository.update_status.return_value = updated
        service = QuoteIntakeService(repository)

        assert service.set_status(3, "traitee") is updated
        repository.update_status.assert_called_once_with(3, QuoteStatus.DONE)

    def test_set_status_unknown_value(self, repository):
        with pytest.raises(ValueError):
            QuoteIntakeService(repository).set_status(3, "perdue")
        repository.update_status.assert_not_called()
