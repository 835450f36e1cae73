"""
Client side of the catalog: API access, local watch state and derived views
"""
from app.client.api import ApiError, AuthSession, CatalogClient
from app.client.records import MovieRecord, OwnerInfo, PersonRecord
from app.client.references import Expanded, Id, Reference, reference_id
from app.client.storage import (
    FileStorage,
    LocalWatchStateRepository,
    MemoryStorage,
    WatchStateRepository,
    favorites_repository,
    watched_repository,
)
from app.client.views import MovieFilters, SortOption, filter_movies, sort_movies

__all__ = [
    "ApiError",
    "AuthSession",
    "CatalogClient",
    "MovieRecord",
    "OwnerInfo",
    "PersonRecord",
    "Expanded",
    "Id",
    "Reference",
    "reference_id",
    "FileStorage",
    "LocalWatchStateRepository",
    "MemoryStorage",
    "WatchStateRepository",
    "favorites_repository",
    "watched_repository",
    "MovieFilters",
    "SortOption",
    "filter_movies",
    "sort_movies",
]
