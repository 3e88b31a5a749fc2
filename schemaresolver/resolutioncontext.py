"""
Resolution context: the schema to validate against at a given point.

A root context is created once per validation from the root schema. As
validation descends into the schema, new contexts are derived from it by
following a JSON Pointer (at_point), by substituting a schema the caller
already holds (with_schema) or by dereferencing an absolute URI (at_uri).
All contexts of one lineage share a single document cache and handler
registry.
"""

# pylint: disable=too-many-instance-attributes

import logging
from typing import Any, Dict, Optional, Union
from urllib.parse import ParseResult, urlparse

import jsonpointer
from jsonpointer import JsonPointer, JsonPointerException

from schemaresolver.documentcache import DocumentCache
from schemaresolver.errors import ResolutionError, SchemaError
from schemaresolver.handlerregistry import SchemeHandlerRegistry
from schemaresolver.schemaid import SchemaLocation, schema_id_of
from schemaresolver.schemaversion import SchemaVersion, detect_version, validate_schema_document
from schemaresolver.urihandlers import URIHandler, fetch_document

logger = logging.getLogger(__name__)


class ResolutionContext:
    """
    Holds the currently active schema and where it was found.

    Attributes:
    active_document: The schema currently in effect.
    active_location: URI of the last document reached by URI, or ANONYMOUS_ID.
    version: The dialect detected for active_document.
    default_version: The dialect assumed for documents that declare none.
    cache: Document cache shared by the whole lineage.
    registry: Scheme handler registry shared by the whole lineage.
    """

    def __init__(self, default_version: SchemaVersion, document: Dict[str, Any],
                 registry: Optional[SchemeHandlerRegistry] = None) -> None:
        """
        Create a root context.

        Args:
            default_version: Dialect assumed for documents without a known ``$schema``.
            document: The root schema document.
            registry: Handler registry to use; a registry with the built-in
                handlers is created when omitted.

        Raises:
            SchemaError: The document is None or not a JSON object.
        """
        self._default_version = default_version
        self._document = validate_schema_document(document)
        self._version = detect_version(document, default_version)
        self._registry = registry if registry is not None else SchemeHandlerRegistry.with_defaults()
        self._cache = DocumentCache()
        self._location: SchemaLocation = schema_id_of(document)
        self._cache.put(self._location, document)

    def _spawn(self, document: Dict[str, Any], location: SchemaLocation,
               version: SchemaVersion) -> 'ResolutionContext':
        ret = ResolutionContext.__new__(ResolutionContext)
        ret._default_version = self._default_version
        ret._cache = self._cache
        ret._registry = self._registry
        ret._document = document
        ret._location = location
        ret._version = version
        return ret

    @property
    def active_document(self) -> Dict[str, Any]:
        """The currently active schema."""
        return self._document

    @property
    def active_location(self) -> SchemaLocation:
        """The URI under which the current document lineage was located."""
        return self._location

    @property
    def version(self) -> SchemaVersion:
        """The dialect detected for the active schema."""
        return self._version

    @property
    def default_version(self) -> SchemaVersion:
        return self._default_version

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    @property
    def registry(self) -> SchemeHandlerRegistry:
        return self._registry

    def set_default_version(self, default_version: SchemaVersion) -> None:
        """Change the default dialect for contexts derived from this one from now on."""
        self._default_version = default_version

    def register_handler(self, scheme: str, handler: URIHandler) -> None:
        """Register a handler for a URI scheme in the shared registry."""
        self._registry.register_handler(scheme, handler)

    def unregister_handler(self, scheme: str) -> None:
        """Remove the handler for a URI scheme from the shared registry."""
        self._registry.unregister_handler(scheme)

    def at_point(self, pointer: Union[str, JsonPointer]) -> 'ResolutionContext':
        """
        Derive a context for a subschema of the document at active_location.

        The pointer is resolved against the document cached for the current
        location, not against the active document.

        Args:
            pointer: A JSON Pointer, as a string or JsonPointer.

        Returns:
            ResolutionContext: A new context with the subschema active.

        Raises:
            SchemaError: The pointer does not resolve to a JSON object.
        """
        base = self._cache.get(self._location)
        if base is None:
            raise SchemaError(f"no document cached for {self._location!r}")
        path = pointer.path if isinstance(pointer, JsonPointer) else pointer
        try:
            if isinstance(pointer, JsonPointer):
                node = pointer.resolve(base)
            else:
                node = jsonpointer.resolve_pointer(base, pointer)
        except JsonPointerException as e:
            raise SchemaError('no match in schema', path) from e
        try:
            version = detect_version(node, self._default_version)
        except SchemaError as e:
            raise SchemaError(e.message, path) from e
        return self._spawn(node, self._location, version)

    def with_schema(self, document: Dict[str, Any]) -> 'ResolutionContext':
        """
        Derive a context with a schema the caller already holds.

        The location and the cache are left as they are.

        Raises:
            SchemaError: The document is None or not a JSON object.
        """
        version = detect_version(document, self._default_version)
        return self._spawn(document, self._location, version)

    def at_uri(self, uri: Union[str, ParseResult]) -> 'ResolutionContext':
        """
        Derive a context for the document at an absolute URI.

        An empty URI or a bare fragment returns this context unchanged; the
        fragment is for the caller to follow with at_point. Documents already
        cached are reused without fetching and keep this context's version.

        Args:
            uri: The URI, typically the value of a ``$ref``.

        Returns:
            ResolutionContext: The context for the document.

        Raises:
            ResolutionError: The URI is malformed, or relative and not a fragment.
            UnsupportedSchemeError: No handler is registered for the scheme.
            OSError: The document could not be fetched.
            SchemaError: The fetched document is not a JSON object.
        """
        if isinstance(uri, ParseResult):
            parsed_url = uri
            uri = uri.geturl()
        else:
            try:
                parsed_url = urlparse(uri)
            except ValueError as e:
                raise ResolutionError(uri, str(e)) from e

        if not parsed_url.scheme:
            if parsed_url.netloc or parsed_url.path or parsed_url.params or parsed_url.query:
                raise ResolutionError(uri)
            return self

        cached = self._cache.get(uri)
        if cached is not None:
            logger.debug("Cache hit for %s", uri)
            return self._spawn(cached, uri, self._version)

        handler = self._registry.get_handler(uri)
        logger.debug("Fetching %s with %s", uri, type(handler).__name__)
        document = fetch_document(handler, uri)

        version = detect_version(document, self._default_version)
        document = self._cache.put(uri, document)
        return self._spawn(document, uri, version)

    def __repr__(self) -> str:
        return (f"ResolutionContext(location={self._location!r}, "
                f"version={self._version.name}, default_version={self._default_version.name})")
