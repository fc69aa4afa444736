"""Email templates for a catalog record."""

from html import escape

from discovery.core.config import settings


def render_text(vars: dict) -> str:
    """
    Render catalog record email text template.

    Args:
        vars: Template variables (title, url, fields, message)

    Returns:
        Plain text email body
    """
    title = vars.get("title", "")
    url = vars.get("url", "")
    fields = vars.get("fields", [])
    message = vars.get("message") or ""

    lines = [f"Title: {title}"]
    lines.extend(f"{label}: {value}" for label, value in fields)
    record = "\n".join(lines)
    note = f"Message: {message}\n\n" if message else ""

    return f"""{note}{record}

Online at: {url}

---
{settings.PROJECT_NAME}
"""


def render_html(vars: dict) -> str:
    """
    Render catalog record email HTML template.

    Args:
        vars: Template variables (title, url, fields, message)

    Returns:
        HTML email body
    """
    title = escape(vars.get("title", ""))
    url = escape(vars.get("url", ""))
    fields = vars.get("fields", [])
    message = vars.get("message") or ""

    rows = "".join(
        f"<tr><th style=\"text-align: left; padding-right: 12px;\">{escape(label)}</th><td>{escape(str(value))}</td></tr>"
        for label, value in fields
    )
    note = f'<p style="color: #333;">{escape(message)}</p>' if message else ""

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    {note}
    <h2 style="color: #333;"><a href="{url}">{title}</a></h2>
    <table>{rows}</table>
    <p style="margin-top: 20px; color: #999; font-size: 0.8em;">
        ---<br>
        {escape(settings.PROJECT_NAME)}
    </p>
</body>
</html>
"""
