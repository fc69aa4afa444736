"""Email templates."""

from discovery.email.templates.record import render_html as record_html, render_text as record_text

TEMPLATES = {
    "DOCUMENT_RECORD": {
        "text": record_text,
        "html": record_html,
    },
}


def render_template(template_key: str, vars: dict, format: str = "text") -> str:
    """
    Render email template.

    Args:
        template_key: Template identifier
        vars: Template variables
        format: "text" or "html"

    Returns:
        Rendered template string
    """
    if template_key not in TEMPLATES:
        raise ValueError(f"Unknown template key: {template_key}")

    template_func = TEMPLATES[template_key].get(format)
    if not template_func:
        raise ValueError(f"Template {template_key} does not support format {format}")

    return template_func(vars)
