"""
Derived views over already-fetched lists
========================================
Everything here is computed client-side from the records returned by the
list endpoints: search and filters, the watched-aware sort, the
"movies featuring this person" scans, and the dashboard counts.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Collection, Iterable, List, Optional, Sequence

from app.client.records import MovieRecord, PersonRecord
from app.client.references import reference_id


# ============================================
# Filtering
# ============================================

@dataclass
class MovieFilters:
    """All filters AND together; empty values do not narrow the list"""
    search: str = ""
    genre: Optional[str] = None
    country: Optional[str] = None
    release_from: Optional[date] = None
    release_to: Optional[date] = None
    rating_from: float = 0
    rating_to: float = 10
    duration_from: float = 0
    duration_to: float = 999

    def is_active(self) -> bool:
        return self != MovieFilters()


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle in haystack.lower()


def matches_search(movie: MovieRecord, search: str) -> bool:
    """Case-insensitive substring match on title or description"""
    needle = (search or "").lower()
    return _contains(movie.title, needle) or _contains(movie.description, needle)


def movie_matches(movie: MovieRecord, filters: MovieFilters) -> bool:
    if not matches_search(movie, filters.search):
        return False

    if filters.genre and movie.genre != filters.genre:
        return False

    if filters.country and movie.country != filters.country:
        return False

    # A missing release date fails any bound that is set
    if filters.release_from and (movie.release_date is None or movie.release_date < filters.release_from):
        return False
    if filters.release_to and (movie.release_date is None or movie.release_date > filters.release_to):
        return False

    rating = movie.rating or 0
    if not filters.rating_from <= rating <= filters.rating_to:
        return False

    duration = movie.duration or 0
    if not filters.duration_from <= duration <= filters.duration_to:
        return False

    return True


def filter_movies(movies: Iterable[MovieRecord], filters: Optional[MovieFilters] = None) -> List[MovieRecord]:
    filters = filters or MovieFilters()
    return [movie for movie in movies if movie_matches(movie, filters)]


# ============================================
# Sorting
# ============================================

class SortOption(str, Enum):
    """Available sort options for the movie list"""
    RATING_DESC = "rating.desc"
    RATING_ASC = "rating.asc"
    YEAR_DESC = "year.desc"
    YEAR_ASC = "year.asc"
    DURATION_DESC = "duration.desc"
    DURATION_ASC = "duration.asc"


DEFAULT_SORT = SortOption.YEAR_DESC


def _sort_key(option: SortOption):
    if option in (SortOption.RATING_DESC, SortOption.RATING_ASC):
        return lambda movie: movie.rating or 0
    if option in (SortOption.YEAR_DESC, SortOption.YEAR_ASC):
        return lambda movie: movie.release_date.year if movie.release_date else 0
    return lambda movie: movie.duration or 0


def sort_movies(
    movies: Sequence[MovieRecord],
    option: SortOption = DEFAULT_SORT,
    watched_ids: Collection[int] = (),
) -> List[MovieRecord]:
    """
    Stable two-tier sort: unwatched movies first, then watched ones,
    each tier ordered by the same key. Ties keep their input order.
    """
    option = SortOption(option)
    key = _sort_key(option)
    descending = option.value.endswith(".desc")

    watched = set(watched_ids)
    unwatched_tier = [movie for movie in movies if movie.id not in watched]
    watched_tier = [movie for movie in movies if movie.id in watched]

    return (
        sorted(unwatched_tier, key=key, reverse=descending)
        + sorted(watched_tier, key=key, reverse=descending)
    )


# ============================================
# Cross-referencing
# ============================================

def movies_by_director(movies: Iterable[MovieRecord], director_id: int) -> List[MovieRecord]:
    """Movies whose director reference points at ``director_id``"""
    return [movie for movie in movies if reference_id(movie.director) == director_id]


def movies_by_actor(movies: Iterable[MovieRecord], actor_id: int) -> List[MovieRecord]:
    """Movies whose cast contains ``actor_id``"""
    return [
        movie for movie in movies
        if any(reference_id(actor) == actor_id for actor in movie.actors)
    ]


def owned_by(records: Iterable, user_id: int) -> list:
    """Records whose owner is ``user_id`` (the "my movies" tab)"""
    return [record for record in records if reference_id(record.owner) == user_id]


def select_movies(movies: Iterable[MovieRecord], movie_ids: Collection[int]) -> List[MovieRecord]:
    """Movies whose id is in ``movie_ids`` (favorites / watched pages), list order kept"""
    wanted = set(movie_ids)
    return [movie for movie in movies if movie.id in wanted]


def search_people(people: Iterable[PersonRecord], term: str) -> List[PersonRecord]:
    """Directors/actors matching ``term`` on name, nationality or bio"""
    needle = (term or "").lower()
    return [
        person for person in people
        if _contains(person.name, needle)
        or _contains(person.nationality, needle)
        or _contains(person.bio, needle)
    ]


def _distinct(values: Iterable[Optional[str]]) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def distinct_genres(movies: Iterable[MovieRecord]) -> List[str]:
    return _distinct(movie.genre for movie in movies)


def distinct_countries(movies: Iterable[MovieRecord]) -> List[str]:
    return _distinct(movie.country for movie in movies)


# ============================================
# Dashboard
# ============================================

RECENT_COUNT = 3


@dataclass
class DashboardStats:
    total_movies: int
    total_directors: int
    total_actors: int
    favorites: int
    watched: int
    recent_movies: List[MovieRecord] = field(default_factory=list)
    recent_directors: List[PersonRecord] = field(default_factory=list)
    recent_actors: List[PersonRecord] = field(default_factory=list)


def dashboard_stats(
    movies: Sequence[MovieRecord],
    directors: Sequence[PersonRecord],
    actors: Sequence[PersonRecord],
    favorite_ids: Collection[int] = (),
    watched_ids: Collection[int] = (),
) -> DashboardStats:
    """
    Totals for the dashboard cards. Favorites/watched only count ids that
    are still present in the fetched movie list. Lists arrive newest first,
    so the recent items are simply the head of each list.
    """
    return DashboardStats(
        total_movies=len(movies),
        total_directors=len(directors),
        total_actors=len(actors),
        favorites=len(select_movies(movies, favorite_ids)),
        watched=len(select_movies(movies, watched_ids)),
        recent_movies=list(movies[:RECENT_COUNT]),
        recent_directors=list(directors[:RECENT_COUNT]),
        recent_actors=list(actors[:RECENT_COUNT]),
    )
