"""
Interface port pour l'envoi de courriels de notification.
"""

from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Contrat d'envoi d'un courriel texte brut."""

    @abstractmethod
    async def send(self, *, sender: str, to: str, subject: str, text: str) -> None:
        """Envoie un courriel. Lève une exception en cas d'échec."""
        ...
