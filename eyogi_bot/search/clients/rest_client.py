# Catalog client for the hosted database REST API (PostgREST-style, e.g. Supabase).
# Same interface as StaticCatalogClient: fetch_courses() / fetch_gurukuls().

import logging
from typing import Any, Dict, List, Optional

import requests

from ..types import Course, Gurukul

logger = logging.getLogger(__name__)


class RestCatalogClient:
    def __init__(self, base_url: str, api_key: Optional[str] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _get(self, table: str) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/rest/v1/{table}"
        params = {"select": "*", "is_active": "eq.true"}
        resp = requests.get(url, params=params, headers=self._headers(), timeout=self.timeout)
        resp.raise_for_status()
        rows = resp.json()
        logger.debug("Fetched %d rows from %s", len(rows), table)
        return rows

    def fetch_courses(self) -> List[Course]:
        return [Course(**row) for row in self._get("courses")]

    def fetch_gurukuls(self) -> List[Gurukul]:
        return [Gurukul(**row) for row in self._get("gurukuls")]
