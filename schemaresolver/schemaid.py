"""Self-identifiers of schema documents.

A schema may name itself with ``$id`` (or ``id`` in draft-03/04). When it
does not, or when the name is not a usable URI, the document is filed under
the anonymous identity instead.
"""

import logging
import re
from typing import Any, Dict, Union
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# RFC 3986 characters, '%' for percent-encoded octets and non-ASCII IRI characters
_URI_CHARACTERS = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%\u00a0-\U0010ffff]*$")
_PERCENT_ENCODING = re.compile(r'%(?![0-9A-Fa-f]{2})')


class AnonymousId:
    """Identity of a document that does not declare a valid URI for itself.

    There is exactly one instance, ``ANONYMOUS_ID``. It is distinct from a
    document that declares the empty string as its ``$id``.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __str__(self) -> str:
        return ''

    def __repr__(self) -> str:
        return 'ANONYMOUS_ID'

    def __bool__(self) -> bool:
        return False


ANONYMOUS_ID = AnonymousId()

SchemaLocation = Union[str, AnonymousId]


def is_valid_uri(value: str) -> bool:
    """Check whether a string is syntactically a URI reference."""
    if not _URI_CHARACTERS.match(value) or _PERCENT_ENCODING.search(value):
        return False
    if any(c.isspace() for c in value):
        return False
    try:
        parsed = urlparse(value)
        # accessing the port validates it
        parsed.port
    except ValueError:
        return False
    return True


def parse_schema_id(value: Any) -> SchemaLocation:
    """Parse a declared self-identifier, falling back to ANONYMOUS_ID.

    Args:
        value: The value of the ``$id``/``id`` keyword, if any.

    Returns:
        The identifier as a URI string, or ANONYMOUS_ID when the value is
        not a string or not a valid URI.
    """
    if not isinstance(value, str):
        return ANONYMOUS_ID
    if not is_valid_uri(value):
        logger.debug("Ignoring malformed schema id %r, treating document as anonymous", value)
        return ANONYMOUS_ID
    return value


def schema_id_of(document: Dict[str, Any]) -> SchemaLocation:
    """Return the identity a schema document declares for itself."""
    for keyword in ('$id', 'id'):
        if isinstance(document.get(keyword), str):
            return parse_schema_id(document[keyword])
    return ANONYMOUS_ID
