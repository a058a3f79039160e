"""Markdown to HTML rendering for challenge descriptions."""

from __future__ import annotations

from logging import getLogger

import markdown

from legacy_processor.domain.model import RenderedText

log = getLogger(__name__)


def render_markdown(text: str) -> RenderedText:
    """Render ``text`` to HTML, keeping the raw text if conversion fails."""

    try:
        html = markdown.markdown(text)
    except Exception:  # noqa: BLE001
        log.warning("Could not render markdown, keeping the raw text", exc_info=True)
        return RenderedText(text=text, converted=False)
    return RenderedText(text=html, converted=True)
