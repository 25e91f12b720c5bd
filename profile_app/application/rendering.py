"""HTML escaping and placeholder substitution for the profile pages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..domain.models import UserRecord

logger = logging.getLogger(__name__)

REGISTER_TEMPLATE = "register.html"
PROFILE_TEMPLATE = "profile.html"

# Ampersand must stay first so entities produced below are not escaped twice.
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(value: Any) -> str:
    """Escape ``value`` for embedding in HTML text or attribute content."""
    if value is None:
        return ""
    text = str(value)
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def render_profile(template: str, user: UserRecord) -> str:
    """Substitute every ``{{field}}`` placeholder with the escaped record value."""
    return (
        template.replace("{{id}}", escape_html(user.id))
        .replace("{{name}}", escape_html(user.name))
        .replace("{{email}}", escape_html(user.email))
        .replace("{{hobbies}}", escape_html(user.hobbies or ""))
        .replace("{{location}}", escape_html(user.location))
    )


def load_template(views_dir: Path, filename: str) -> str:
    return (views_dir / filename).read_text(encoding="utf-8")


class TemplateCache:
    """Holds the page templates, read from disk once per process."""

    def __init__(self, views_dir: Path) -> None:
        self.views_dir = views_dir
        self.register_page = load_template(views_dir, REGISTER_TEMPLATE)
        self.profile_template = load_template(views_dir, PROFILE_TEMPLATE)
        logger.debug("Loaded templates from %s", views_dir)

    def render_profile(self, user: UserRecord) -> str:
        return render_profile(self.profile_template, user)
