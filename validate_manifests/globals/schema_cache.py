import logging
from typing import Any, Dict, Optional

from validate_manifests.globals.web_fetcher import SchemaFetcher, WebSchemaFetcher

logger = logging.getLogger(__name__)


class SchemaCache:
    """
    Run-scoped memo of resolved schemas, keyed by schema URL.

    One instance is created per run and handed to every validation call so
    documents sharing a kind and version reuse the schema resolved for the
    first of them. Misses are cached as well, so each URL is fetched at most
    once per run. Not safe for concurrent first access.
    """

    def __init__(self, fetcher: Optional[SchemaFetcher] = None) -> None:
        self.fetcher = fetcher or WebSchemaFetcher()
        self._schemas: Dict[str, Optional[Dict[str, Any]]] = {}
        self.resolution_count = 0

    def get(self, url: str) -> Optional[Dict[str, Any]]:
        """Return the schema at ``url``, fetching it on first use."""
        if url in self._schemas:
            logger.debug("Schema cache hit for %s", url)
            return self._schemas[url]

        logger.debug("Resolving schema %s", url)
        self.resolution_count += 1
        schema = self.fetcher.fetch(url)
        self._schemas[url] = schema
        return schema

    def __contains__(self, url: str) -> bool:
        return url in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
