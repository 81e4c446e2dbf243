"""
Safety primitives used to vet preset and style values.

The engine only ever asks "does this string survive the primitive
unchanged?". A value is safe when ``primitive(value) == value``. The
primitives are bundled in a :class:`SafetyPolicy` so hosts can plug in
their own implementations; the defaults below follow the host platform's
single-pass filters closely enough to run the engine standalone.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

# Properties a declaration may set. Custom properties (--*) are always allowed.
ALLOWED_CSS_PROPERTIES: frozenset[str] = frozenset(
    {
        "background",
        "background-color",
        "border",
        "border-color",
        "border-radius",
        "border-style",
        "border-width",
        "color",
        "font-family",
        "font-size",
        "font-style",
        "font-weight",
        "letter-spacing",
        "line-height",
        "margin",
        "margin-top",
        "margin-right",
        "margin-bottom",
        "margin-left",
        "padding",
        "padding-top",
        "padding-right",
        "padding-bottom",
        "padding-left",
        "text-align",
        "text-decoration",
        "text-transform",
    }
)

_GRADIENT_PROPERTIES = frozenset({"background", "background-image"})

_GRADIENT_RE = re.compile(
    r"^(repeating-)?(linear|radial|conic)-gradient\(([^()]|rgba?\([^()]*\)|hsla?\([^()]*\))*\)$"
)
_CALC_RE = re.compile(r"calc\(((?:\([^()]*\)?|[^()])*)\)")
_VAR_RE = re.compile(r"\(?var\(--[\w\-()\[\],\s]*\)")
_FORBIDDEN_RE = re.compile(r"[\\(&=}]|/\*")
_PAYLOAD_RE = re.compile(r"javascript\s*:|expression\s*\(|behavior\s*:", re.IGNORECASE)

_PERCENT_OCTET_RE = re.compile(r"%[a-fA-F0-9][a-fA-F0-9]")
_CLASS_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")
# & not starting an existing entity reference
_BARE_AMPERSAND_RE = re.compile(r"&(?!(?:#\d+|#x[0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);)")


def filter_css(css: str) -> str:
    """Keep the declarations of ``css`` that are considered safe.

    Declarations are split on ``;``. One is kept when its property is
    allowed and, once well-formed ``calc()``, ``var()`` and gradient calls
    are removed, the rest holds none of ``\\ ( & } =``, no comment opener
    and no script payload. Kept declarations are joined with ``;``.
    """
    css = css.replace("\0", "")
    css = re.sub(r"[\n\r\t]", "", css)

    kept: list[str] = []
    for item in css.strip().split(";"):
        item = item.strip()
        if not item:
            continue

        test_string = item
        if ":" not in item:
            found = True
        else:
            prop, value = (part.strip() for part in item.split(":", 1))
            found = prop in ALLOWED_CSS_PROPERTIES or prop.startswith("--")
            if found and prop in _GRADIENT_PROPERTIES and _GRADIENT_RE.match(value):
                test_string = test_string.replace(value, "")

        if not found:
            continue

        test_string = _CALC_RE.sub("", test_string)
        test_string = _VAR_RE.sub("", test_string)
        if _FORBIDDEN_RE.search(test_string) or _PAYLOAD_RE.search(item):
            continue
        kept.append(item)

    return ";".join(kept)


def escape_html(text: str) -> str:
    """Escape HTML special characters, leaving existing entities alone."""
    text = _BARE_AMPERSAND_RE.sub("&amp;", text)
    return (
        text.replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def escape_attr(text: str) -> str:
    """Escape text for use inside an HTML attribute."""
    return escape_html(text)


def sanitize_html_class(text: str) -> str:
    """Strip everything that cannot appear in a CSS class name."""
    text = _PERCENT_OCTET_RE.sub("", text)
    return _CLASS_UNSAFE_RE.sub("", text)


@dataclass(frozen=True)
class SafetyPolicy:
    """The checks a value must survive unchanged to be kept."""

    filter_css: Callable[[str], str] = filter_css
    escape_html: Callable[[str], str] = escape_html
    escape_attr: Callable[[str], str] = escape_attr
    sanitize_html_class: Callable[[str], str] = sanitize_html_class

    def is_safe_declaration(self, declaration: str) -> bool:
        return self.escape_html(self.filter_css(declaration)) == declaration

    def is_safe_name(self, name: str) -> bool:
        return self.escape_attr(self.escape_html(name)) == name

    def is_safe_slug(self, slug: str) -> bool:
        return self.sanitize_html_class(slug) == slug


DEFAULT_SAFETY_POLICY = SafetyPolicy()
