"""
Tests pour le client Resend (httpx mocke avec respx).
"""

import json

import httpx
import pytest
import respx

from vitrine.adapters.email.resend_client import ResendEmailClient

EMAILS_URL = "https://api.resend.com/emails"


class TestResendEmailClient:
    """Tests pour ResendEmailClient.send."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_send_posts_plain_text_email(self) -> None:
        route = respx.post(EMAILS_URL).mock(
            return_value=httpx.Response(200, json={"id": "email-1"})
        )
        client = ResendEmailClient(api_key="re_test")

        await client.send(
            sender="Zéro huit <no-reply@zerohuit.ca>",
            to="lev@zerohuit.ca",
            subject="Nouvelle demande",
            text="Bonjour",
        )
        await client.close()

        assert route.call_count == 1
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer re_test"
        body = json.loads(request.content)
        assert body == {
            "from": "Zéro huit <no-reply@zerohuit.ca>",
            "to": ["lev@zerohuit.ca"],
            "subject": "Nouvelle demande",
            "text": "Bonjour",
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_send_raises_on_api_error(self) -> None:
        respx.post(EMAILS_URL).mock(return_value=httpx.Response(422, json={"message": "invalid"}))
        client = ResendEmailClient(api_key="re_test")

        with pytest.raises(httpx.HTTPStatusError):
            await client.send(sender="a@b.c", to="d@e.f", subject="s", text="t")
        await client.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        client = ResendEmailClient(api_key="re_test")
        await client.close()
        await client.close()
