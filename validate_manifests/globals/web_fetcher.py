"""Schema fetching with retry logic.

This module provides the mechanics for loading JSON schemas from wherever a
schema location points:

- ``http://`` and ``https://`` URLs are fetched with ``requests``, retried on
  transient failures
- ``file://`` URLs and plain filesystem paths are read from disk

Memoization is not done here; see ``SchemaCache``, which wraps a fetcher for
the lifetime of one run.

Typical usage:
    fetcher = WebSchemaFetcher(max_retries=3, request_timeout=10)
    schema = fetcher.fetch('https://kubernetesjsonschema.dev/master-standalone/pod-v1.json')
    if schema is not None:
        ...
"""

import json
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import unquote, urlparse

import requests

logger = logging.getLogger(__name__)


class SchemaFetcher(ABC):
    """Abstract interface for loading a JSON schema from a location.

    Examples:
        >>> fetcher = SomeSchemaFetcherImplementation()
        >>> schema = fetcher.fetch('https://example.com/schemas/pod-v1.json')
        >>> if schema is not None:
        ...     properties = schema.get('properties', {})
    """

    @abstractmethod
    def fetch(self, url: str) -> Optional[Dict[str, Any]]:
        """Fetch and decode the schema at ``url``.

        Args:
            url: HTTP(S) URL, ``file://`` URL or filesystem path.

        Returns:
            The decoded schema, or None if it does not exist or could not be
            retrieved.
        """
        pass


class WebSchemaFetcher(SchemaFetcher):
    """Implementation of SchemaFetcher for remote and local schema locations.

    Remote schemas are requested through a shared ``requests.Session`` so
    connections are reused across the many lookups of a run. Failed requests
    are retried with a fixed backoff. A 404 is treated as a definitive miss
    and is not retried.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        max_retries: int = 3,
        request_timeout: int = 10,
        retry_backoff_factor: float = 0.5,
    ) -> None:
        """Initialize the fetcher.

        Args:
            session: Optional requests.Session to use. If None, a new session
                will be created.
            max_retries: Maximum number of retry attempts for failed requests.
                Set to 0 to disable retries.
            request_timeout: Timeout in seconds for each HTTP request.
            retry_backoff_factor: Seconds to sleep between retries.
        """
        self.session = session or requests.Session()
        self.max_retries = max_retries
        self.request_timeout = request_timeout
        self.retry_backoff_factor = retry_backoff_factor

    def fetch(self, url: str) -> Optional[Dict[str, Any]]:
        scheme = urlparse(url).scheme
        if scheme in ("http", "https"):
            return self._fetch_remote(url)
        if scheme == "file":
            return self._fetch_local(Path(unquote(urlparse(url).path)))
        return self._fetch_local(Path(url))

    def _fetch_remote(self, url: str) -> Optional[Dict[str, Any]]:
        for attempt in range(self.max_retries + 1):
            try:
                response = self.session.get(url, timeout=self.request_timeout)
                if response.status_code == 404:
                    logger.debug("No schema at %s", url)
                    return None
                response.raise_for_status()
                return response.json()
            except ValueError as e:
                logger.warning("Schema at %s is not valid JSON: %s", url, e)
                return None
            except requests.RequestException as e:
                logger.debug("Request for %s failed (attempt %d): %s", url, attempt + 1, e)
                if attempt < self.max_retries:
                    time.sleep(self.retry_backoff_factor)

        return None

    def _fetch_local(self, path: Path) -> Optional[Dict[str, Any]]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            logger.debug("No schema at %s", path)
            return None
        except (OSError, ValueError) as e:
            logger.warning("Could not load schema %s: %s", path, e)
            return None
