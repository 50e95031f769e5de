# Catalog clients: the live course/gurukul source consulted by the knowledge index.

from typing import List, Protocol

from ..types import Course, Gurukul
from .rest_client import RestCatalogClient
from .static_client import StaticCatalogClient


class CatalogClient(Protocol):
    def fetch_courses(self) -> List[Course]: ...

    def fetch_gurukuls(self) -> List[Gurukul]: ...


def build_catalog_client(cfg) -> CatalogClient:
    """Pick the catalog backend from settings (CATALOG_BACKEND = static | rest)."""
    backend = (cfg.CATALOG_BACKEND or "static").lower()
    if backend == "rest":
        if not cfg.CATALOG_URL:
            raise ValueError("CATALOG_URL is required when CATALOG_BACKEND=rest")
        return RestCatalogClient(
            base_url=cfg.CATALOG_URL,
            api_key=cfg.CATALOG_API_KEY,
            timeout=cfg.CATALOG_TIMEOUT,
        )
    if backend == "static":
        return StaticCatalogClient(path=cfg.CATALOG_DATA_PATH)
    raise ValueError(f"Unknown CATALOG_BACKEND: {cfg.CATALOG_BACKEND}")


__all__ = ["CatalogClient", "RestCatalogClient", "StaticCatalogClient", "build_catalog_client"]
