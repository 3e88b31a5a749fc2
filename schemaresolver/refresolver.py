"""Following ``$ref`` values with a resolution context."""

import logging
import os
import urllib.parse
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import unquote, urldefrag, urlparse

from schemaresolver.errors import ResolutionError
from schemaresolver.handlerregistry import SchemeHandlerRegistry
from schemaresolver.resolutioncontext import ResolutionContext
from schemaresolver.schemaid import ANONYMOUS_ID, SchemaLocation
from schemaresolver.schemaversion import SchemaVersion
from schemaresolver.urihandlers import fetch_document

logger = logging.getLogger(__name__)


def compose_uri(base_uri: SchemaLocation, ref: str) -> str:
    """
    Compose the absolute URI of the document a reference points to.

    Args:
        base_uri: The location of the referring document.
        ref: The document part of the reference (without fragment).

    Returns:
        str: An absolute URI, or '' when the reference stays in the current document.

    Raises:
        ResolutionError: The reference is relative and there is no base URI to resolve it against.
    """
    url = urlparse(ref)
    if url.scheme:
        return url.geturl()
    if not url.path and not url.netloc and not url.query:
        return ''
    if base_uri is ANONYMOUS_ID or not urlparse(str(base_uri)).scheme:
        raise ResolutionError(ref, 'relative reference in a document without an absolute id')
    base_uri = str(base_uri)
    if base_uri.startswith('file:') and not url.netloc and not url.path.startswith('/'):
        parsed_file_uri = urlparse(base_uri)
        directory = os.path.dirname(unquote(parsed_file_uri.path))
        filename = os.path.normpath(os.path.join(directory, unquote(url.path))).replace(os.sep, '/')
        return f"file://{urllib.parse.quote(filename)}"
    # combine the base URI with the URL
    return join_uri(base_uri, url.geturl())


def join_uri(base_uri: str, ref: str) -> str:
    """Resolve ref against base_uri, for any hierarchical scheme."""
    scheme = urlparse(base_uri).scheme
    if scheme in urllib.parse.uses_relative:
        return urllib.parse.urljoin(base_uri, ref)
    # urljoin only resolves relative references for schemes it knows
    joined = urllib.parse.urljoin('http' + base_uri[len(scheme):], ref)
    return scheme + joined[len('http'):] if joined.startswith('http:') else joined


def resolve_reference(context: ResolutionContext, ref: str) -> ResolutionContext:
    """
    Resolve a ``$ref`` value relative to a context.

    The document part is made absolute against context.active_location and
    dereferenced with at_uri, then the fragment is followed with at_point.

    Args:
        context: The context the reference appears in.
        ref: The reference.

    Returns:
        ResolutionContext: The context for the referenced schema.
    """
    document_ref, fragment = urldefrag(ref)
    target = context.at_uri(compose_uri(context.active_location, document_ref))
    return target.at_point(unquote(fragment))


def to_uri(location: str) -> str:
    """Turn a local path into a file URI; URIs are returned unchanged."""
    parsed_url = urlparse(location)
    if parsed_url.scheme and len(parsed_url.scheme) > 1:
        return location
    return Path(os.path.abspath(location)).as_uri()


def load_schema(location: str, default_version: SchemaVersion = SchemaVersion.DRAFT_V4,
                registry: Optional[SchemeHandlerRegistry] = None) -> ResolutionContext:
    """
    Fetch a root schema and create a context located at its URI.

    The document is also filed under the URI it was fetched from, so that
    relative references resolve against that URI even when the document
    declares no ``$id`` of its own.

    Args:
        location: A file path or an absolute URI.
        default_version: Dialect assumed for documents without a known ``$schema``.
        registry: Handler registry; the built-in handlers are used when omitted.

    Returns:
        ResolutionContext: A context whose active document is the fetched schema.
    """
    uri = to_uri(location)
    if registry is None:
        registry = SchemeHandlerRegistry.with_defaults()
    document = fetch_document(registry.get_handler(uri), uri)
    root = ResolutionContext(default_version, document, registry)
    root.cache.put(uri, document)
    return root.at_uri(uri)


def resolve_context(location: str, ref: str = '', default_version: str = 'draft-04') -> ResolutionContext:
    """Load a schema and return the context a reference resolves to."""
    context = load_schema(location, SchemaVersion.from_name(default_version))
    if ref:
        context = resolve_reference(context, ref)
    logger.info("Resolved %r in %s as %s", ref, context.active_location, context.version.name)
    return context


def resolve_schema(location: str, ref: str = '', default_version: str = 'draft-04') -> Dict[str, Any]:
    """Load a schema and return the subschema a reference resolves to."""
    return resolve_context(location, ref, default_version).active_document


def schema_dialect(location: str, ref: str = '', default_version: str = 'draft-04') -> str:
    """Load a schema and return the dialect in effect at a reference."""
    return resolve_context(location, ref, default_version).version.location
