"""Markdown and HTML escaping utilities."""

import html
import re

from bs4 import BeautifulSoup

_EMPHASIS_TAGS = {
    "bold": "strong",
    "italic": "em",
    "code": "code",
    "strikethrough": "del",
}

_INLINE_PATTERNS = [
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.+?)\*"), r"<em>\1</em>"),
    (re.compile(r"`(.+?)`"), r"<code>\1</code>"),
    (re.compile(r"~~(.+?)~~"), r"<del>\1</del>"),
]

_DANGEROUS_TAGS = frozenset({"script", "style", "iframe", "object", "embed"})
_URL_ATTRS = frozenset({"href", "src", "action", "formaction", "xlink:href"})
_SCRIPT_SCHEMES = ("javascript:", "vbscript:")
_TAG_NAME = re.compile(r"^[a-z][a-z0-9-]*$")
_ATTR_NAME = re.compile(r"^[a-z_:][a-z0-9_:.-]*$")
# Browsers ignore whitespace and control characters inside URL schemes
_URL_JUNK = re.compile(r"[\x00-\x20]+")


def apply_emphasis(text: str, emphasis: str) -> str:
    """Wrap text in the markdown markers for ``emphasis``."""
    if emphasis == "bold":
        return f"**{text}**"
    if emphasis == "italic":
        return f"*{text}*"
    if emphasis == "code":
        return escape_inline_code(text)
    if emphasis == "strikethrough":
        return f"~~{text}~~"
    return text


def emphasis_to_html(text: str, emphasis: str) -> str:
    """Wrap text in the HTML tag for ``emphasis``."""
    tag = _EMPHASIS_TAGS.get(emphasis)
    return f"<{tag}>{text}</{tag}>" if tag else text


def inline_markdown_to_html(text: str) -> str:
    """Convert inline markdown emphasis to HTML tags.

    Markdown is not parsed inside raw HTML blocks, so aligned text that is
    emitted as ``<p align>`` has its emphasis converted first.
    """
    for pattern, replacement in _INLINE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def escape_attr(text: str) -> str:
    """Escape a value for use inside a double-quoted HTML attribute."""
    return html.escape(text, quote=True)


def escape_alt_text(text: str) -> str:
    """Escape square brackets so alt text cannot close the image syntax."""
    return text.replace("[", "\\[").replace("]", "\\]")


def escape_inline_code(text: str) -> str:
    """Escape content for use in inline code spans.

    If text contains backticks, uses double backticks with spacing.
    """
    if "`" not in text:
        return f"`{text}`"
    return f"`` {text} ``"


def sanitize_html(markup: str) -> str:
    """Strip scripts, embedded frames, event handlers and script URLs.

    The markup is parsed with BeautifulSoup, so the checks see tag names and
    attribute values the way a browser would, with entities decoded.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        if tag.name in _DANGEROUS_TAGS or not _TAG_NAME.match(tag.name):
            tag.decompose()
            continue
        for name in list(tag.attrs):
            if name.startswith("on") or not _ATTR_NAME.match(name):
                del tag.attrs[name]
            elif name in _URL_ATTRS and _is_script_url(tag.attrs[name]):
                tag.attrs[name] = "#"
    return str(soup)


def _is_script_url(value: str | list[str]) -> bool:
    if isinstance(value, list):
        value = " ".join(value)
    return _URL_JUNK.sub("", value).lower().startswith(_SCRIPT_SCHEMES)


def normalize_line_endings(text: str, line_ending: str = "lf") -> str:
    """Convert every line break to ``\\n`` or ``\\r\\n``."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if line_ending == "crlf":
        return text.replace("\n", "\r\n")
    return text
