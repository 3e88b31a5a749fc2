"""Registry mapping URI schemes to the handlers that fetch them."""

import logging
from typing import Dict, List, Mapping, Optional
from urllib.parse import urlparse

from schemaresolver.errors import UnsupportedSchemeError
from schemaresolver.urihandlers import URIHandler, default_handlers

logger = logging.getLogger(__name__)


class SchemeHandlerRegistry:
    """
    Dispatch table from URI scheme to handler.

    Schemes are compared case-insensitively. Registering a scheme that is
    already present replaces its handler; documents fetched before the
    change are not affected.
    """

    def __init__(self, handlers: Optional[Mapping[str, URIHandler]] = None) -> None:
        self._handlers: Dict[str, URIHandler] = {}
        for scheme, handler in (handlers or {}).items():
            self.register_handler(scheme, handler)

    @classmethod
    def with_defaults(cls) -> 'SchemeHandlerRegistry':
        """Create a registry holding the built-in http, https and file handlers."""
        return cls(default_handlers())

    def register_handler(self, scheme: str, handler: URIHandler) -> None:
        """Register a handler for a scheme, replacing any previous one."""
        if not scheme:
            raise ValueError('scheme must not be empty')
        self._handlers[scheme.lower()] = handler

    def unregister_handler(self, scheme: str) -> None:
        """Remove the handler for a scheme, if there is one."""
        self._handlers.pop(scheme.lower(), None)

    def get_handler(self, uri: str) -> URIHandler:
        """
        Find the handler for the scheme of uri.

        Raises:
            UnsupportedSchemeError: No handler is registered for the scheme.
        """
        scheme = urlparse(uri).scheme.lower()
        handler = self._handlers.get(scheme)
        if handler is None:
            raise UnsupportedSchemeError(scheme, uri)
        return handler

    def schemes(self) -> List[str]:
        """Return the registered schemes."""
        return sorted(self._handlers)

    def __contains__(self, scheme: object) -> bool:
        return isinstance(scheme, str) and scheme.lower() in self._handlers
