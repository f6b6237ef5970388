"""Shared manifests, schemas and test doubles for validate-manifests tests."""

from collections import Counter
from typing import Any, Dict, Optional

from validate_manifests.globals.web_fetcher import SchemaFetcher, WebSchemaFetcher

POD_SCHEMA = {
    "type": "object",
    "required": ["spec"],
    "properties": {
        "apiVersion": {"type": "string"},
        "kind": {"type": "string"},
        "metadata": {"type": "object"},
        "spec": {
            "type": "object",
            "required": ["containers"],
            "properties": {
                "containers": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["name"],
                        "properties": {
                            "name": {"type": "string"},
                            "image": {"type": "string"},
                        },
                    },
                }
            },
        },
    },
}

DEPLOYMENT_SCHEMA = {
    "type": "object",
    "properties": {
        "apiVersion": {"type": "string"},
        "kind": {"type": "string"},
        "spec": {
            "type": "object",
            "properties": {"replicas": {"type": "integer"}},
        },
    },
}

VALID_POD = """apiVersion: v1
kind: Pod
metadata:
  name: web
spec:
  containers:
    - name: web
      image: nginx:1.25
"""

INVALID_POD = """apiVersion: v1
kind: Pod
metadata:
  name: web
spec:
  containers:
    - image: nginx:1.25
"""

VALID_DEPLOYMENT = """apiVersion: apps/v1
kind: Deployment
metadata:
  name: web
spec:
  replicas: 2
"""


class CountingSchemaFetcher(SchemaFetcher):
    """Schema fetcher stand-in that records how often each URL is fetched."""

    def __init__(self, delegate: Optional[SchemaFetcher] = None):
        self.delegate = delegate or WebSchemaFetcher()
        self.calls: Counter = Counter()

    def fetch(self, url: str) -> Optional[Dict[str, Any]]:
        self.calls[url] += 1
        return self.delegate.fetch(url)


