"""Envoi des courriels de notification."""

from vitrine.adapters.email.resend_client import ResendEmailClient

__all__ = ["ResendEmailClient"]
