from __future__ import annotations

import logging

import markdown
import pytest

from legacy_processor.adapters.rendering import render_markdown


def test_markdown_is_rendered_to_html() -> None:
    rendered = render_markdown("# Title\n\nSome **bold** text")

    assert rendered.converted is True
    assert "<h1>Title</h1>" in rendered.text
    assert "<strong>bold</strong>" in rendered.text


def test_empty_text_renders_to_empty_html() -> None:
    rendered = render_markdown("")

    assert rendered.converted is True
    assert rendered.text == ""


def test_conversion_failure_keeps_raw_text(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def broken(_text: str) -> str:
        raise RuntimeError("boom")

    monkeypatch.setattr(markdown, "markdown", broken)

    with caplog.at_level(logging.WARNING):
        rendered = render_markdown("# Title")

    assert rendered.converted is False
    assert rendered.text == "# Title"
    assert "Could not render markdown" in caplog.text
