"""Exceptions raised by the schema resolver."""


class SchemaResolverError(Exception):
    """Base class for all schema resolver errors."""


class SchemaError(SchemaResolverError):
    """Raised when a document is not a usable schema.

    This covers documents that are missing or not JSON objects, and
    JSON Pointers that do not resolve to a node of the current document.
    """

    def __init__(self, message: str, pointer: str | None = None):
        self.message = message
        self.pointer = pointer
        super().__init__(f"{message} (path {pointer})" if pointer is not None else message)


class ResolutionError(SchemaResolverError, ValueError):
    """Raised when a URI is neither absolute nor a pure fragment reference."""

    def __init__(self, uri: str, message: str = 'URI is not absolute and is not a JSON Pointer either'):
        self.uri = uri
        super().__init__(f"invalid URI {uri!r}: {message}")


class UnsupportedSchemeError(SchemaResolverError, OSError):
    """Raised when no handler is registered for the scheme of a URI."""

    def __init__(self, scheme: str, uri: str):
        self.scheme = scheme
        self.uri = uri
        super().__init__(f"Unsupported URL scheme: {scheme!r} ({uri})")


class SchemaFetchError(SchemaResolverError, OSError):
    """Raised when a handler retrieved a resource that could not be turned into a document."""

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Error fetching schema from {uri}: {reason}")
