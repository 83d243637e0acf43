"""
Runtime loader for the JSON copy of the career dataset.

Fetches career-nodes.json and career-paths.json from wherever the graph view
is served, with a cache-busting timestamp on both requests, and mirrors the
Dutch-labelled spreadsheet columns onto stable field names.
"""

import logging
import time
from typing import Any, Dict, Optional

import requests

from .data_structures import Dataset

logger = logging.getLogger(__name__)

# Source JSON key -> stable field name used by the presentation layer
NODE_KEY_REMAP = {
    'Care/non care': 'careNonCare',
    'Care cluster': 'careCluster',
    'Link naar PIO werkenbij (ter bespreking)': 'pioLink',
}


class CareerDataLoaderError(Exception):
    """Exception raised when the runtime dataset cannot be fetched."""
    pass


def remap_node_keys(node: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of the node with the remapped fields added."""
    remapped = dict(node)
    for source_key, target_key in NODE_KEY_REMAP.items():
        remapped[target_key] = node.get(source_key)
    return remapped


def cache_busting_params(now: Optional[float] = None) -> Dict[str, str]:
    """Query parameters that defeat intermediate caches (ms timestamp)."""
    if now is None:
        now = time.time()
    return {'v': str(int(round(now * 1000)))}


class CareerDataLoader:
    """Fetches the nodes and paths documents over HTTP."""

    def __init__(self, base_url: str, timeout: float = 15.0,
                 nodes_file: str = 'career-nodes.json',
                 paths_file: str = 'career-paths.json',
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.nodes_file = nodes_file
        self.paths_file = paths_file
        self.session = session or requests.Session()

    def _url(self, filename: str) -> str:
        return f"{self.base_url}/{filename}"

    def _fetch(self, filename: str, key: str, params: Dict[str, str]) -> list:
        url = self._url(filename)
        logger.info(f"Fetching {url}")
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            document = resp.json()
        except requests.exceptions.Timeout:
            raise CareerDataLoaderError(f"Request for {url} timed out")
        except requests.exceptions.ConnectionError as e:
            raise CareerDataLoaderError(f"Connection error fetching {url}: {e}")
        except requests.exceptions.HTTPError as e:
            raise CareerDataLoaderError(f"HTTP error fetching {url}: {e}")
        except requests.exceptions.JSONDecodeError as e:
            raise CareerDataLoaderError(f"Invalid JSON in {url}: {e}")
        except requests.exceptions.RequestException as e:
            raise CareerDataLoaderError(f"Request for {url} failed: {e}")
        except ValueError as e:
            raise CareerDataLoaderError(f"Invalid JSON in {url}: {e}")

        if not isinstance(document, dict) or not isinstance(document.get(key), list):
            raise CareerDataLoaderError(f"{url} has no '{key}' list")
        return document[key]

    def load_documents(self, now: Optional[float] = None) -> Dict[str, list]:
        """Fetch both files and return the combined `{nodes, paths}` structure."""
        params = cache_busting_params(now)
        nodes = self._fetch(self.nodes_file, 'nodes', params)
        paths = self._fetch(self.paths_file, 'paths', params)
        return {
            'nodes': [remap_node_keys(node) for node in nodes],
            'paths': paths,
        }

    def load(self, now: Optional[float] = None) -> Dataset:
        """Fetch both files and return them as a Dataset."""
        documents = self.load_documents(now)
        dataset = Dataset.from_documents(documents, documents)
        logger.info(
            f"Loaded {len(dataset.nodes)} nodes and {len(dataset.paths)} paths from {self.base_url}")
        return dataset
