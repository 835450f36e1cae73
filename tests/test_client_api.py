"""
CatalogClient against the real application (TestClient as the transport)
"""
import json
from datetime import date

import pytest

from app.client.api import TOKEN_KEY, USER_KEY, ApiError, AuthSession, CatalogClient
from app.client.references import expanded_value, reference_id
from app.client.storage import MemoryStorage
from app.client.views import movies_by_director
from conftest import ACTOR_PAYLOAD, DIRECTOR_PAYLOAD, movie_payload

PASSWORD = "Password123"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def api(client, storage):
    catalog = CatalogClient("http://testserver/api", session=client, storage=storage)
    catalog.register("Client User", "client@example.com", PASSWORD)
    catalog.login("client@example.com", PASSWORD)
    return catalog


class TestAuth:

    def test_login_persists_session(self, api, storage):
        assert api.auth.is_authenticated
        assert storage.get_item(TOKEN_KEY) == api.auth.token
        assert json.loads(storage.get_item(USER_KEY))["email"] == "client@example.com"
        assert api.me()["email"] == "client@example.com"

    def test_session_restored_from_storage(self, api, client, storage):
        restored = CatalogClient("http://testserver/api", session=client, storage=storage)

        assert restored.auth.viewer.id == api.auth.viewer.id
        assert restored.list_movies() == []

    def test_logout_clears_session(self, api, storage):
        api.logout()

        assert storage.get_item(TOKEN_KEY) is None
        with pytest.raises(ApiError) as exc:
            api.list_movies()
        assert exc.value.status_code in (401, 403)

    def test_corrupt_stored_user_clears_session(self):
        storage = MemoryStorage({TOKEN_KEY: "abc", USER_KEY: "{not json"})

        session = AuthSession(storage)

        assert session.token is None
        assert session.viewer is None
        assert storage.get_item(TOKEN_KEY) is None

    def test_bad_login_message_passes_through(self, client):
        catalog = CatalogClient("http://testserver/api", session=client)

        with pytest.raises(ApiError) as exc:
            catalog.login("nobody@example.com", PASSWORD)

        assert exc.value.status_code == 401
        assert exc.value.message == "Incorrect email or password"


class TestCrud:

    def test_create_movie_with_references(self, api):
        director = api.create_director({**DIRECTOR_PAYLOAD, "birth_date": date(1983, 8, 4)})
        actor = api.create_actor(ACTOR_PAYLOAD)

        movie = api.create_movie(movie_payload(director.id, [actor.id]))

        assert reference_id(movie.director) == director.id
        assert expanded_value(movie.director).name == DIRECTOR_PAYLOAD["name"]
        assert [reference_id(a) for a in movie.actors] == [actor.id]
        assert reference_id(movie.owner) == api.auth.viewer.id
        assert movie.release_date == date(2017, 11, 3)

    def test_server_messages_are_verbatim(self, api):
        with pytest.raises(ApiError) as missing:
            api.get_movie(4242)
        assert missing.value.status_code == 404
        assert missing.value.message == "Movie not found"

        director = api.create_director(DIRECTOR_PAYLOAD)
        with pytest.raises(ApiError) as invalid:
            api.create_movie(movie_payload(director.id, rating=11))
        assert invalid.value.status_code == 400
        assert invalid.value.message.startswith("rating:")

    def test_delete_returns_confirmation(self, api):
        actor = api.create_actor(ACTOR_PAYLOAD)

        assert api.delete_actor(actor.id) == "Actor deleted successfully"
        assert api.list_actors() == []


class TestCacheInvalidation:

    def test_list_is_served_from_cache(self, api, client):
        api.create_director(DIRECTOR_PAYLOAD)
        first = api.list_directors()

        # Written behind the client's back: the cached list is not refreshed
        client.post(
            "/api/directors",
            json={**DIRECTOR_PAYLOAD, "name": "Unseen"},
            headers={"Authorization": f"Bearer {api.auth.token}"},
        )

        assert api.list_directors() is first
        assert len(api.list_directors()) == 1

    def test_create_invalidates_list(self, api):
        api.list_movies()
        assert ("movies",) in api.cache

        director = api.create_director(DIRECTOR_PAYLOAD)
        api.create_movie(movie_payload(director.id))

        assert ("movies",) not in api.cache
        assert len(api.list_movies()) == 1

    def test_update_invalidates_list_and_detail(self, api):
        director = api.create_director(DIRECTOR_PAYLOAD)
        movie = api.create_movie(movie_payload(director.id))
        api.list_movies()
        api.get_movie(movie.id)

        updated = api.update_movie(movie.id, {"rating": 9})

        assert updated.rating == 9
        assert ("movies",) not in api.cache
        assert ("movie", movie.id) not in api.cache
        assert api.get_movie(movie.id).rating == 9
        assert api.list_movies()[0].rating == 9

    def test_delete_invalidates_list_and_detail(self, api):
        director = api.create_director(DIRECTOR_PAYLOAD)
        api.list_directors()
        api.get_director(director.id)

        api.delete_director(director.id)

        assert ("directors",) not in api.cache
        assert ("director", director.id) not in api.cache
        assert api.list_directors() == []

    def test_failed_mutation_keeps_cache(self, api):
        api.list_movies()

        with pytest.raises(ApiError):
            api.update_movie(999, {"rating": 5})

        assert ("movies",) in api.cache

    def test_person_changes_invalidate_movie_queries(self, api):
        director = api.create_director(DIRECTOR_PAYLOAD)
        actor = api.create_actor(ACTOR_PAYLOAD)
        movie = api.create_movie(movie_payload(director.id, [actor.id]))
        api.list_movies()
        api.get_movie(movie.id)

        api.update_actor(actor.id, {"name": "Renamed Actor"})

        assert ("movies",) not in api.cache
        assert ("movie", movie.id) not in api.cache
        assert expanded_value(api.get_movie(movie.id).actors[0]).name == "Renamed Actor"

        api.list_movies()
        api.delete_director(director.id)

        assert movies_by_director(api.list_movies(), director.id) == []
        assert api.get_movie(movie.id).director is None

    def test_person_create_keeps_movie_queries(self, api):
        api.list_movies()

        api.create_director(DIRECTOR_PAYLOAD)

        assert ("movies",) in api.cache
