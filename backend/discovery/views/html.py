"""HTML views for the document show page and its modal dialog."""

from collections.abc import Sequence
from html import escape

from discovery.catalog.config import CatalogConfig
from discovery.catalog.urls import CatalogUrls
from discovery.core.config import settings
from discovery.search.response import Document

MODAL_ID = "discovery-modal"
CLOSE_LABEL = "×"


def render_layout(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)} - {escape(settings.PROJECT_NAME)}</title>
</head>
<body>
{body}
</body>
</html>
"""


def render_document_fields(document: Document, config: CatalogConfig) -> str:
    rows = []
    for field in config.show.fields:
        value = document.text(field.field)
        if value is None:
            continue
        rows.append(
            f'    <dt class="field-{escape(field.field)}">{escape(field.display_label)}:</dt>\n'
            f'    <dd class="field-{escape(field.field)}">{escape(value)}</dd>'
        )
    if not rows:
        return ""
    return '<dl class="document-fields">\n' + "\n".join(rows) + "\n</dl>"


def render_document_actions(document: Document, urls: CatalogUrls) -> str:
    """Tool links for a document; each opens in the modal dialog."""
    email_url = escape(urls.email_url(document.id))
    return f"""<ul class="document-actions">
    <li><a href="{email_url}" data-modal-target="#{MODAL_ID}" id="emailLink">Email</a></li>
</ul>"""


def render_show_sidebar(
    document: Document,
    more_like_this: Sequence[Document],
    config: CatalogConfig,
    urls: CatalogUrls,
) -> str:
    """Sidebar with document actions and the More Like This list."""
    parts = [render_document_actions(document, urls)]

    if more_like_this:
        title_field = config.index.title_field
        items = "\n".join(
            f'        <li><a href="{escape(urls.document_url(similar.id))}">'
            f"{escape(similar.title(title_field))}</a></li>"
            for similar in more_like_this
        )
        parts.append(
            f"""<section class="more-like-this">
    <h2>More Like This</h2>
    <ul>
{items}
    </ul>
</section>"""
        )

    return '<aside class="show-sidebar">\n' + "\n".join(parts) + "\n</aside>"


def render_show_page(
    document: Document,
    more_like_this: Sequence[Document],
    config: CatalogConfig,
    urls: CatalogUrls,
) -> str:
    title = document.title(config.show.title_field)
    body = f"""<main class="document" id="document-{escape(document.id)}">
<h1>{escape(title)}</h1>
{render_document_fields(document, config)}
</main>
{render_show_sidebar(document, more_like_this, config, urls)}"""
    return render_layout(title, body)


def render_modal(title: str, body: str) -> str:
    """A native ``<dialog>``; the close control submits a ``method="dialog"`` form."""
    return f"""<dialog id="{MODAL_ID}" aria-labelledby="{MODAL_ID}-title" open>
    <header class="modal-header">
        <h1 id="{MODAL_ID}-title">{escape(title)}</h1>
        <form method="dialog">
            <button type="submit" class="close" aria-label="Close">{CLOSE_LABEL}</button>
        </form>
    </header>
    <div class="modal-body">
{body}
    </div>
</dialog>"""


def render_email_form(
    document: Document,
    config: CatalogConfig,
    urls: CatalogUrls,
    to: str = "",
    message: str = "",
    error: str | None = None,
) -> str:
    error_html = f'        <p class="error" role="alert">{escape(error)}</p>\n' if error else ""
    body = f"""        <form action="{escape(urls.email_url(document.id))}" method="post" class="email-form">
{error_html}        <label for="to">Email:</label>
        <input type="email" id="to" name="to" value="{escape(to)}" required>
        <label for="message">Message:</label>
        <textarea id="message" name="message">{escape(message)}</textarea>
        <button type="submit">Send</button>
        </form>"""
    return render_modal(f"Email {document.title(config.show.title_field)}", body)


def render_email_sent(document: Document, config: CatalogConfig, to: str) -> str:
    body = f'        <p class="success">Email sent to {escape(to)}.</p>'
    return render_modal(f"Email {document.title(config.show.title_field)}", body)
