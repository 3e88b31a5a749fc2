"""JSON Schema dialect versions and their detection.

A schema document declares its dialect through the ``$schema`` keyword.
Documents that do not declare one, or declare one we do not know, are
assumed to follow the default version configured by the caller.
"""

from enum import Enum
from typing import Any, Dict, Optional

from schemaresolver.errors import SchemaError


class SchemaVersion(Enum):
    """Known JSON Schema dialects, keyed by their meta-schema URI."""

    DRAFT_V3 = 'http://json-schema.org/draft-03/schema#'
    DRAFT_V4 = 'http://json-schema.org/draft-04/schema#'
    DRAFT_V6 = 'http://json-schema.org/draft-06/schema#'
    DRAFT_V7 = 'http://json-schema.org/draft-07/schema#'
    DRAFT_2019_09 = 'https://json-schema.org/draft/2019-09/schema'
    DRAFT_2020_12 = 'https://json-schema.org/draft/2020-12/schema'

    @property
    def location(self) -> str:
        """The meta-schema URI of this dialect."""
        return self.value

    @classmethod
    def from_uri(cls, uri: Any) -> Optional['SchemaVersion']:
        """Return the dialect for a ``$schema`` value, or None if it is unrecognized."""
        if not isinstance(uri, str):
            return None
        return _BY_LOCATION.get(_normalize_location(uri))

    @classmethod
    def from_name(cls, name: str) -> 'SchemaVersion':
        """Look a dialect up by enum name (``DRAFT_V4``) or short alias (``draft-04``, ``2020-12``)."""
        key = name.strip()
        if key.lower() in _BY_ALIAS:
            return _BY_ALIAS[key.lower()]
        if key.upper() in cls.__members__:
            return cls[key.upper()]
        raise ValueError(f"Unknown schema version: {name}")


def _normalize_location(uri: str) -> str:
    # an empty fragment and the http/https spelling do not change the dialect
    uri = uri.strip()
    if uri.endswith('#'):
        uri = uri[:-1]
    if uri.startswith('https://'):
        uri = 'http://' + uri[len('https://'):]
    return uri


_BY_LOCATION: Dict[str, SchemaVersion] = {_normalize_location(v.value): v for v in SchemaVersion}

_BY_ALIAS: Dict[str, SchemaVersion] = {
    'draft-03': SchemaVersion.DRAFT_V3,
    'draft-04': SchemaVersion.DRAFT_V4,
    'draft-06': SchemaVersion.DRAFT_V6,
    'draft-07': SchemaVersion.DRAFT_V7,
    '2019-09': SchemaVersion.DRAFT_2019_09,
    '2020-12': SchemaVersion.DRAFT_2020_12,
}


def validate_schema_document(document: Any) -> Dict[str, Any]:
    """Check that a value can be used as a schema and return it.

    Raises:
        SchemaError: The value is None or not a JSON object.
    """
    if document is None:
        raise SchemaError('schema is null')
    if not isinstance(document, dict):
        raise SchemaError('not a schema (not an object)')
    return document


def detect_version(document: Any, default_version: SchemaVersion) -> SchemaVersion:
    """
    Detect the dialect of a schema document.

    Args:
        document: The schema document.
        default_version: The version to use when the document does not name a known dialect.

    Returns:
        SchemaVersion: The declared dialect, or default_version.

    Raises:
        SchemaError: The document is None or not a JSON object.
    """
    validate_schema_document(document)
    version = SchemaVersion.from_uri(document.get('$schema'))
    return default_version if version is None else version
