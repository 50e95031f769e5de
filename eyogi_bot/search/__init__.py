# Makes the folder importable as a package.
# Exports KnowledgeIndex and the search data models for convenience.

from .clients import CatalogClient, RestCatalogClient, StaticCatalogClient, build_catalog_client
from .knowledge import KnowledgeIndex
from .types import Course, Gurukul, KnowledgeSnippet, SearchResult

__all__ = [
    "CatalogClient",
    "Course",
    "Gurukul",
    "KnowledgeIndex",
    "KnowledgeSnippet",
    "RestCatalogClient",
    "SearchResult",
    "StaticCatalogClient",
    "build_catalog_client",
]
