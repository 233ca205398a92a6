"""Federated image search across container registries."""

from .errors import (
    InvalidReferenceError,
    MultiRegistryError,
    RegistryConfigError,
    RegistryQueryError,
    RepositoryTagsError,
    SearchError,
    SearchTimeoutError,
)
from .schemas import SearchFilter, SearchOptions, SearchResult
from .services.search_service import SearchService

__all__ = [
    "InvalidReferenceError",
    "MultiRegistryError",
    "RegistryConfigError",
    "RegistryQueryError",
    "RepositoryTagsError",
    "SearchError",
    "SearchFilter",
    "SearchOptions",
    "SearchResult",
    "SearchService",
    "SearchTimeoutError",
]
