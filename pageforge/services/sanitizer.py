"""HTML clean-up for user-supplied section markup.

Section strings come from templates filled with dataset values, so they may
carry markup.  :func:`sanitize_fragment` keeps ordinary content markup and
drops anything that can execute or restyle the page.
"""

import re

from bs4 import BeautifulSoup, Comment, Tag

# Tags whose entire subtree is removed (scripting / embedding / styling)
_REMOVE_TAGS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "frame",
    "frameset",
    "object",
    "embed",
    "applet",
    "link",
    "meta",
    "base",
    "form",
    "template",
}

# Inline CSS and event-handler attributes
_JUNK_ATTRS = re.compile(r"^(style|on\w+)$", re.IGNORECASE)

# Attributes holding URLs that must not use an executable scheme
_URL_ATTRS = ("href", "src", "action", "formaction", "xlink:href")
_UNSAFE_URL_RE = re.compile(r"^\s*(javascript|vbscript|data)\s*:", re.IGNORECASE)


def sanitize(html: str) -> BeautifulSoup:
    """Remove unsafe elements and attributes from *html*, returning the parsed tree."""
    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(_REMOVE_TAGS):
        # Nested matches go with their removed ancestor.
        if not tag.decomposed:
            tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if not isinstance(tag, Tag):
            continue
        junk = [attr for attr in tag.attrs if _JUNK_ATTRS.match(attr)]
        for attr in junk:
            del tag[attr]
        for attr in _URL_ATTRS:
            value = tag.get(attr)
            if isinstance(value, str) and _UNSAFE_URL_RE.match(value):
                del tag[attr]

    return soup


def sanitize_fragment(html: str) -> str:
    """Return a safe markup string for the fragment *html*.

    Plain text comes back HTML-escaped; an empty input gives ``""``.
    """
    if not html or not html.strip():
        return ""
    soup = sanitize(html)
    # lxml wraps fragments in <html><body>; head-only input has no body.
    container = soup.body
    if container is None:
        return ""
    # Text nodes hold decoded entities; re-escape them on the way out.
    return container.decode_contents(formatter="minimal").strip()
