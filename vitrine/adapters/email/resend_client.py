"""
Client Resend pour l'envoi des courriels de notification.

Implemente l'interface IEmailSender via l'API HTTP de Resend.

Usage:
    client = ResendEmailClient(api_key="re_xxx")
    await client.send(sender="...", to="...", subject="...", text="...")
    await client.close()
"""

from typing import Optional

import httpx

from vitrine.core.ports.notifier import IEmailSender


class ResendEmailClient(IEmailSender):
    """
    Client API Resend.

    Attributes:
        RESEND_BASE_URL: URL de base de l'API Resend
    """

    RESEND_BASE_URL = "https://api.resend.com"

    def __init__(self, api_key: str, timeout: float = 30.0) -> None:
        """
        Initialise le client Resend.

        Args:
            api_key: Cle API Resend
            timeout: Delai maximum d'une requete en secondes
        """
        self._api_key = api_key
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.RESEND_BASE_URL,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
        return self._client

    async def send(self, *, sender: str, to: str, subject: str, text: str) -> None:
        """
        Envoie un courriel texte brut.

        Raises:
            httpx.HTTPStatusError: Si l'API repond par une erreur
            httpx.RequestError: Si la requete echoue (reseau, delai)
        """
        client = self._get_client()
        response = await client.post(
            "/emails",
            json={"from": sender, "to": [to], "subject": subject, "text": text},
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
