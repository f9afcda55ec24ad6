"""HTTP methods, content types and request body content-type guessing.

The guessing heuristics are deliberately cheap: they look at the first few
characters of a body and can be fooled. Passing ``--type`` explicitly is
always more reliable than relying on a guess.
"""

from __future__ import annotations

import string
from enum import Enum

from postline.core.exceptions import UnknownContentTypeError, UnknownMethodError

# Characters that can appear unescaped in a URL-encoded key, based on
# https://datatracker.ietf.org/doc/html/rfc3986#section-2.3, plus '+' which
# some encoders use for spaces.
_URL_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "-._~+")
_HEX_DIGITS = frozenset(string.hexdigits)

# Browsers and clients start multipart boundaries with 6 (Chromium) to 29
# (Firefox) hyphens, so five is a safe minimum.
_MULTIPART_PREFIX = "-----"

_SHORT_BODY_BYTES = 20


class HttpMethod(Enum):
    """The HTTP methods supported by postline.

    httpx accepts arbitrary method names, so the supported set is enforced here.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, text: str) -> HttpMethod:
        name = text.upper()
        try:
            return cls(name)
        except ValueError:
            raise UnknownMethodError(name) from None

    def __str__(self) -> str:
        return self.value


class ContentType(Enum):
    TEXT = "text/plain"
    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"
    MULTIPART = "multipart/form-data"

    @classmethod
    def parse(cls, text: str) -> ContentType:
        name = text.lower()
        try:
            return _CONTENT_TYPE_ALIASES[name]
        except KeyError:
            raise UnknownContentTypeError(name) from None

    def __str__(self) -> str:
        return self.value


_CONTENT_TYPE_ALIASES = {
    "text": ContentType.TEXT,
    "text/plain": ContentType.TEXT,
    "json": ContentType.JSON,
    "application/json": ContentType.JSON,
    "form": ContentType.FORM,
    "application/x-www-form-urlencoded": ContentType.FORM,
    "multipart": ContentType.MULTIPART,
    "file": ContentType.MULTIPART,
    "multipart/form-data": ContentType.MULTIPART,
}


def maybe_url_encoded(body: str) -> bool:
    """Guess whether ``body`` is URL encoded (percent encoded).

    The guess is positive when the body starts with a key followed by ``=``,
    for example ``a-s.d_f~0+%21=``. The key may only contain unreserved
    characters, ``+`` and percent escapes, and every ``%`` must be followed
    by exactly two hex digits. Hex escapes such as ``%2F`` are accepted, unlike
    a decimal-only check, so ``%2F=1`` is guessed as a form body.
    """
    digits_left = 0
    key_len = 0
    for char in body:
        if digits_left:
            if char not in _HEX_DIGITS:
                break
            digits_left -= 1
        elif char == "%":
            digits_left = 2
        elif char not in _URL_KEY_CHARS:
            break
        key_len += 1

    # No key found or the last escape is incomplete
    if key_len == 0 or digits_left:
        return False
    return body[key_len : key_len + 1] == "="


def maybe_json(body: str) -> bool:
    """Guess whether ``body`` is JSON.

    JSON bodies usually carry an object at the top level, so this looks for
    ``{`` followed by a string key and a colon, ignoring whitespace. The key
    is assumed to contain no escape sequences. Short bodies are also checked
    for being an empty object.
    """
    if len(body.encode("utf-8")) < _SHORT_BODY_BYTES and "".join(body.split()) == "{}":
        return True

    open_bracket_found = False
    open_quote_found = False
    close_quote_found = False
    for char in body:
        if char.isspace():
            continue
        if not open_bracket_found:
            if char != "{":
                return False
            open_bracket_found = True
        elif not open_quote_found:
            if char != '"':
                return False
            open_quote_found = True
        elif not close_quote_found:
            close_quote_found = char == '"'
        else:
            return char == ":"
    return False


def is_multipart(body: str) -> bool:
    return body.startswith(_MULTIPART_PREFIX)


def guess_content_type(body: str) -> ContentType:
    """Guess the content type of a request body."""
    if maybe_json(body):
        return ContentType.JSON
    if maybe_url_encoded(body):
        return ContentType.FORM
    if is_multipart(body):
        return ContentType.MULTIPART
    return ContentType.TEXT


def multipart_boundary(body: str) -> str | None:
    """Return the boundary declared by the first delimiter line of a multipart body."""
    first_line = body.split("\n", 1)[0].rstrip("\r")
    if not first_line.startswith("--"):
        return None
    boundary = first_line[2:].strip()
    return boundary or None


def content_type_header(content_type: ContentType, body: str | None = None) -> str:
    """Build the Content-Type header value for a request body.

    A multipart body is unreadable by servers without its boundary, so the
    boundary is appended when it can be found in the body.
    """
    if content_type is ContentType.MULTIPART and body:
        boundary = multipart_boundary(body)
        if boundary:
            return f"{content_type}; boundary={boundary}"
    return str(content_type)
