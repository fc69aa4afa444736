"""Console email provider (local development)."""

import uuid

from discovery.core.logging import get_logger
from discovery.services.email.base import EmailProvider

logger = get_logger(__name__)


class ConsoleEmailProvider(EmailProvider):
    """Writes emails to the application log instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[dict[str, str | None]] = []

    def send(
        self,
        to: str,
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> str:
        message_id = f"console:{uuid.uuid4()}"
        self.sent.append({"to": to, "subject": subject, "body_text": body_text, "message_id": message_id})
        logger.info(
            f"EMAIL (Console Provider) to={to} subject={subject}",
            extra={
                "email_to": to,
                "email_subject": subject,
                "email_body_text": body_text,
                "email_has_html": body_html is not None,
                "message_id": message_id,
            },
        )
        return message_id
