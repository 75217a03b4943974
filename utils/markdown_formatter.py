"""
Turn loosely structured model output into renderable HTML.

Gemini answers often use ``Label:`` lines as section titles and unicode bullet
glyphs instead of markdown list markers. The rules below promote those to
markdown before rendering. They run in a fixed order; later rules assume the
earlier ones already ran.
"""

import inspect
import re
from typing import Awaitable, Union

from markdown_it import MarkdownIt

# Line-start label, e.g. "Key Findings:" -> "## Key Findings"
_SECTION_LABEL = re.compile(r"^([A-Za-z][A-Za-z\s]+):(\s*)", re.MULTILINE)
# Remaining labels; a digit after the colon ("Step 1:2", "10:30") is not a label
_SUB_LABEL = re.compile(r"^([A-Za-z][A-Za-z\s]+):(?!\d)", re.MULTILINE)
_BULLET_GLYPH = re.compile(r"^[•●○]\s*", re.MULTILINE)

_PASSTHROUGH_PREFIXES = ("#", "*", "-")

_renderer = MarkdownIt("commonmark", {"breaks": True, "linkify": True}).enable(
    ["table", "strikethrough", "linkify"]
)


def to_markdown(raw_text: str) -> str:
    """Apply the promotion rules and return markdown source."""
    text = raw_text.replace("\r\n", "\n")
    text = _SECTION_LABEL.sub(r"## \1\2", text)
    text = _SUB_LABEL.sub(r"### \1", text)
    text = _BULLET_GLYPH.sub("* ", text)

    paragraphs = [p for p in text.split("\n\n") if p]
    formatted = [p if p.startswith(_PASSTHROUGH_PREFIXES) else f"{p}\n" for p in paragraphs]
    return "\n\n".join(formatted)


def normalize(raw_text: str) -> str:
    """
    Convert raw model text to HTML.

    Deterministic and never raises for string input: text that matches none of
    the rules is rendered as plain paragraphs.
    """
    if not raw_text:
        return ""
    return _renderer.render(to_markdown(raw_text))


async def format_response(text: Union[str, Awaitable[str]]) -> str:
    """``normalize`` for a value that may still be pending."""
    if inspect.isawaitable(text):
        text = await text
    return normalize(text or "")
