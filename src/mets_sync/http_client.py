# src/mets_sync/http_client.py
import logging

import requests

logger = logging.getLogger(__name__)

MLB_API_BASE = "https://statsapi.mlb.com/api/v1"
BLUESKY_API_BASE = "https://public.api.bsky.app/xrpc"


class JsonClient:
    """Thin wrapper around a requests session for read-only JSON endpoints."""

    def __init__(self, timeout: float = 30.0, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Accept"] = "application/json"

    def get_json(self, url: str, params: dict | None = None):
        """Fetches the URL and returns the decoded JSON body. Raises on 4xx/5xx."""
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()  # Raise an exception for bad status codes (4xx or 5xx)
        logger.info(f"Successfully fetched {response.url}")
        return response.json()

    def close(self):
        self.session.close()
