from datetime import date

import pytest

from app.client.records import MovieRecord, PersonRecord
from app.client.references import Expanded, Id
from app.client.views import (
    MovieFilters,
    SortOption,
    dashboard_stats,
    distinct_genres,
    filter_movies,
    movies_by_actor,
    movies_by_director,
    owned_by,
    search_people,
    sort_movies,
)


def movie(movie_id, title="Untitled", **fields):
    return MovieRecord(id=movie_id, title=title, **fields)


def person(person_id, name, **fields):
    return PersonRecord(id=person_id, name=name, **fields)


@pytest.fixture
def catalog():
    return [
        movie(1, "Alpha", genre="Drama", rating=8.0, duration=110, release_date=date(2001, 5, 1),
              country="France", description="A slow burn."),
        movie(2, "Beta", genre="Comedy", rating=6.5, duration=95, release_date=date(2015, 2, 1),
              country="USA", description="Laughs."),
        movie(3, "Gamma", genre="Drama", rating=9.1, duration=150, release_date=date(2010, 9, 9),
              country="USA", description="Epic in scope."),
    ]


# ============================================
# Filtering
# ============================================

class TestFilters:

    def test_genre_filter(self):
        movies = [movie(1, "Alpha", genre="Drama"), movie(2, "Beta", genre="Comedy")]

        result = filter_movies(movies, MovieFilters(genre="Comedy"))

        assert [m.title for m in result] == ["Beta"]

    def test_default_filters_keep_everything(self, catalog):
        assert filter_movies(catalog) == catalog
        assert MovieFilters().is_active() is False

    def test_search_is_case_insensitive_on_title_and_description(self, catalog):
        assert [m.id for m in filter_movies(catalog, MovieFilters(search="GAMMA"))] == [3]
        assert [m.id for m in filter_movies(catalog, MovieFilters(search="slow"))] == [1]

    def test_filters_and_together(self, catalog):
        filters = MovieFilters(genre="Drama", country="USA", rating_from=9)

        assert [m.id for m in filter_movies(catalog, filters)] == [3]

    def test_release_range_excludes_missing_dates(self, catalog):
        catalog.append(movie(4, "Undated", rating=5, duration=90))
        filters = MovieFilters(release_from=date(2005, 1, 1), release_to=date(2012, 12, 31))

        assert [m.id for m in filter_movies(catalog, filters)] == [3]

    def test_missing_rating_and_duration_count_as_zero(self):
        unrated = movie(5, "Unrated")

        assert filter_movies([unrated]) == [unrated]
        assert filter_movies([unrated], MovieFilters(rating_from=1)) == []
        assert filter_movies([unrated], MovieFilters(duration_from=1)) == []


# ============================================
# Sorting
# ============================================

class TestSorting:

    @pytest.mark.parametrize("option", list(SortOption))
    def test_sort_is_idempotent(self, catalog, option):
        once = sort_movies(catalog, option, watched_ids={2})
        twice = sort_movies(once, option, watched_ids={2})

        assert [m.id for m in once] == [m.id for m in twice]

    @pytest.mark.parametrize("option", list(SortOption))
    def test_unwatched_always_precede_watched(self, catalog, option):
        watched = {3}

        result = sort_movies(catalog, option, watched_ids=watched)
        flags = [m.id in watched for m in result]

        assert flags == sorted(flags)

    def test_rating_desc(self, catalog):
        assert [m.id for m in sort_movies(catalog, SortOption.RATING_DESC)] == [3, 1, 2]

    def test_year_asc_accepts_string_option(self, catalog):
        assert [m.id for m in sort_movies(catalog, "year.asc")] == [1, 3, 2]

    def test_watched_tier_is_sorted_by_same_key(self, catalog):
        result = sort_movies(catalog, SortOption.DURATION_ASC, watched_ids={1, 3})

        assert [m.id for m in result] == [2, 1, 3]

    def test_missing_values_sort_as_zero(self, catalog):
        catalog.append(movie(4, "Blank"))

        assert sort_movies(catalog, SortOption.RATING_ASC)[0].id == 4
        assert sort_movies(catalog, SortOption.YEAR_DESC)[-1].id == 4

    def test_ties_keep_input_order(self):
        movies = [movie(1, "A", rating=7), movie(2, "B", rating=7), movie(3, "C", rating=7)]

        assert [m.id for m in sort_movies(movies, SortOption.RATING_DESC)] == [1, 2, 3]

    def test_unknown_option_is_rejected(self, catalog):
        with pytest.raises(ValueError):
            sort_movies(catalog, "title.asc")


# ============================================
# Cross-referencing & search
# ============================================

class TestCrossReference:

    def test_director_reference_matches_id_or_expanded(self):
        director = person(10, "Agnès Varda")
        movies = [
            movie(1, director=Id(10)),
            movie(2, director=Expanded(director)),
            movie(3, director=Id(11)),
            movie(4),
        ]

        assert [m.id for m in movies_by_director(movies, 10)] == [1, 2]

    def test_actor_reference_matches_mixed_cast(self):
        movies = [
            movie(1, actors=[Id(20), Id(21)]),
            movie(2, actors=[Expanded(person(21, "Sandrine Bonnaire"))]),
            movie(3, actors=[]),
        ]

        assert [m.id for m in movies_by_actor(movies, 21)] == [1, 2]
        assert movies_by_actor(movies, 99) == []

    def test_owned_by(self):
        movies = [movie(1, owner=Id(5)), movie(2, owner=Id(6)), movie(3)]

        assert [m.id for m in owned_by(movies, 5)] == [1]

    def test_search_people_matches_name_nationality_or_bio(self):
        people = [
            person(1, "Agnès Varda", nationality="French", bio="New Wave"),
            person(2, "Greta Gerwig", nationality="American", bio="Writer"),
            person(3, "Jane Campion", nationality=None, bio=None),
        ]

        assert [p.id for p in search_people(people, "french")] == [1]
        assert [p.id for p in search_people(people, "WRITER")] == [2]
        assert [p.id for p in search_people(people, "campion")] == [3]
        assert len(search_people(people, "")) == 3

    def test_distinct_genres_keeps_first_seen_order(self, catalog):
        catalog.append(movie(4, genre=None))

        assert distinct_genres(catalog) == ["Drama", "Comedy"]


# ============================================
# Dashboard
# ============================================

def test_dashboard_counts_only_present_ids(catalog):
    directors = [person(i, f"D{i}") for i in range(5)]
    actors = [person(i, f"A{i}") for i in range(2)]

    stats = dashboard_stats(catalog, directors, actors, favorite_ids=[1, 42], watched_ids=[2, 3])

    assert (stats.total_movies, stats.total_directors, stats.total_actors) == (3, 5, 2)
    assert stats.favorites == 1
    assert stats.watched == 2
    assert [d.name for d in stats.recent_directors] == ["D0", "D1", "D2"]
    assert len(stats.recent_actors) == 2
