""" Handlers that fetch schema documents for a URI scheme. """

import json
import logging
import os
from typing import Any, Dict, Optional, Protocol
from urllib.parse import unquote, urlparse

import requests

from schemaresolver.errors import SchemaFetchError

logger = logging.getLogger(__name__)


class URIHandler(Protocol):
    """Anything that can fetch a schema document for a URI.

    Implementations signal failures with OSError (IOError).
    """

    def fetch(self, uri: str) -> Dict[str, Any]:
        ...


def parse_document(uri: str, content: str) -> Dict[str, Any]:
    """Parse fetched text as JSON.

    Raises:
        SchemaFetchError: The content is not valid JSON.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise SchemaFetchError(uri, f"Error decoding JSON: {e}") from e


def fetch_document(handler: URIHandler, uri: str) -> Dict[str, Any]:
    """
    Fetch a document with a handler.

    Raises:
        OSError: The handler failed; failures that are not OSError are
            raised as SchemaFetchError.
    """
    try:
        return handler.fetch(uri)
    except OSError:
        raise
    except Exception as e:
        raise SchemaFetchError(uri, str(e)) from e


class HttpURIHandler:
    """
    Fetches documents over HTTP or HTTPS.

    Attributes:
    timeout: Request timeout in seconds.
    session: Optional requests session used for all requests.
    """

    def __init__(self, timeout: float = 30, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self.session = session

    def fetch(self, uri: str) -> Dict[str, Any]:
        """
        Fetch a document with a GET request.

        Raises:
            requests.RequestException: The request failed or returned a 4XX/5XX status.
            SchemaFetchError: The response is not JSON.
        """
        getter = self.session.get if self.session is not None else requests.get
        logger.debug("GET %s", uri)
        response = getter(uri, timeout=self.timeout)
        # Raises an HTTPError if the response status code is 4XX/5XX
        response.raise_for_status()
        return parse_document(uri, response.text)


class FileURIHandler:
    """Reads documents from ``file:`` URIs."""

    def __init__(self, encoding: str = 'utf-8') -> None:
        self.encoding = encoding

    @staticmethod
    def file_path(uri: str) -> str:
        """Turn a file URI into a local path."""
        parsed_url = urlparse(uri)
        file_path = unquote(parsed_url.path)
        if parsed_url.netloc and parsed_url.netloc != 'localhost':
            # file://relative/path style URIs put the first segment in netloc
            file_path = unquote(parsed_url.netloc) + file_path
        # On Windows, a file URL might start with a '/' but it's not part of the actual path
        if os.name == 'nt' and file_path.startswith('/'):
            file_path = file_path[1:]
        return file_path

    def fetch(self, uri: str) -> Dict[str, Any]:
        """
        Read and parse the file a URI points to.

        Raises:
            OSError: The file could not be read.
            SchemaFetchError: The file is not JSON.
        """
        file_path = self.file_path(uri)
        logger.debug("Reading %s", file_path)
        with open(file_path, 'r', encoding=self.encoding) as file:
            return parse_document(uri, file.read())


def default_handlers() -> Dict[str, URIHandler]:
    """Return a fresh set of the built-in handlers, keyed by scheme."""
    http_handler = HttpURIHandler()
    return {
        'http': http_handler,
        'https': http_handler,
        'file': FileURIHandler(),
    }
