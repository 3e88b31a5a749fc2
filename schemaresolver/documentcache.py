"""Cache of schema documents collected during one resolution."""

import logging
from typing import Any, Dict, Iterator, Optional

from schemaresolver.schemaid import SchemaLocation

logger = logging.getLogger(__name__)


class DocumentCache:
    """
    Maps the URI a document was reached under to the parsed document.

    One cache is shared by every context derived from the same root. Entries
    are never evicted or replaced: the first document stored under a key
    stays there for the lifetime of the cache.
    """

    def __init__(self) -> None:
        self._documents: Dict[SchemaLocation, Dict[str, Any]] = {}

    def get(self, uri: SchemaLocation) -> Optional[Dict[str, Any]]:
        """Return the document stored under uri, or None."""
        return self._documents.get(uri)

    def put(self, uri: SchemaLocation, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Store a document unless the key is already taken.

        Returns:
            dict: The document stored under uri after the call.
        """
        if uri in self._documents:
            logger.debug("Document for %r already cached, keeping the first one", uri)
            return self._documents[uri]
        self._documents[uri] = document
        return document

    def __contains__(self, uri: object) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[SchemaLocation]:
        return iter(self._documents)

    def __repr__(self) -> str:
        return f"DocumentCache({list(self._documents)!r})"
