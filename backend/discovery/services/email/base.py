"""Base email provider interface."""

from abc import ABC, abstractmethod


class EmailProvider(ABC):
    """Base interface for email providers."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> str:
        """
        Send an email.

        Returns:
            Provider message ID ("console:<uuid>" or the SMTP Message-ID)
        """
