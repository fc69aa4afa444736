"""Email service factory and record mailer."""

from discovery.catalog.config import CatalogConfig
from discovery.catalog.urls import CatalogUrls
from discovery.core.config import settings
from discovery.core.logging import get_logger
from discovery.email.templates import render_template
from discovery.search.response import Document
from discovery.services.email.base import EmailProvider
from discovery.services.email.console import ConsoleEmailProvider
from discovery.services.email.smtp import SMTPEmailProvider

logger = get_logger(__name__)

# Global email service instance
_email_service: EmailProvider | None = None


def get_email_service() -> EmailProvider:
    """
    Get the email service provider.

    Returns:
        EmailProvider instance selected by EMAIL_BACKEND
    """
    global _email_service

    if _email_service is not None:
        return _email_service

    backend = settings.EMAIL_BACKEND.lower()

    if backend in ("mailpit", "smtp"):
        _email_service = SMTPEmailProvider(
            host=settings.EMAIL_HOST,
            port=settings.EMAIL_PORT,
            from_email=settings.EMAIL_FROM,
            use_tls=settings.EMAIL_USE_TLS,
            use_ssl=settings.EMAIL_USE_SSL,
        )
        logger.info(f"Email service initialized: SMTP ({settings.EMAIL_HOST}:{settings.EMAIL_PORT})")
    else:
        _email_service = ConsoleEmailProvider()
        logger.info("Email service initialized: Console")

    return _email_service


def reset_email_service() -> None:
    global _email_service
    _email_service = None


def send_email(
    to: str,
    subject: str,
    body_text: str,
    body_html: str | None = None,
) -> str:
    """
    Send an email using the configured email service.
    Falls back to the console provider if SMTP delivery fails.

    Returns:
        Provider message ID
    """
    service = get_email_service()
    try:
        return service.send(to=to, subject=subject, body_text=body_text, body_html=body_html)
    except Exception as e:
        if isinstance(service, SMTPEmailProvider):
            logger.warning(f"SMTP email failed, falling back to console: {e}")
            return ConsoleEmailProvider().send(to=to, subject=subject, body_text=body_text, body_html=body_html)
        raise


def record_template_vars(
    document: Document,
    config: CatalogConfig,
    urls: CatalogUrls,
    message: str | None = None,
) -> dict:
    fields = []
    for field in config.show.fields:
        value = document.text(field.field)
        if value is not None:
            fields.append((field.display_label, value))
    return {
        "title": document.title(config.show.title_field),
        "url": urls.document_url(document.id),
        "fields": fields,
        "message": message,
    }


def send_document_record(
    document: Document,
    to: str,
    config: CatalogConfig,
    urls: CatalogUrls,
    message: str | None = None,
) -> str:
    """Email a catalog record to ``to``."""
    vars = record_template_vars(document, config, urls, message)
    message_id = send_email(
        to=to,
        subject=f"Item Record: {vars['title']}",
        body_text=render_template("DOCUMENT_RECORD", vars, "text"),
        body_html=render_template("DOCUMENT_RECORD", vars, "html"),
    )
    logger.info(
        f"Record emailed: document_id={document.id}",
        extra={"document_id": document.id, "message_id": message_id},
    )
    return message_id
