"""
Catalog API Client
==================
Data-fetch layer for the catalog API with a per-client query cache.

Reads are served from the cache when present; every successful mutation
invalidates the cached queries it affects:

    create  -> list
    update  -> list + detail
    delete  -> list + detail

Directors and actors are embedded in movie payloads, so updating or
deleting one also drops every cached movie list and movie detail.

Usage:
    client = CatalogClient("http://localhost:8000/api", storage=FileStorage("~/.catalog.json"))
    client.login("me@example.com", "Secret123")
    movies = client.list_movies()
"""
from datetime import date
from typing import Any, Callable, Dict, List, Optional
import json
import logging

import requests

from app.client.cache import QueryCache
from app.client.records import MovieRecord, OwnerInfo, PersonRecord
from app.client.storage import KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
TOKEN_KEY = "token"
USER_KEY = "user"


def _jsonable(payload: dict) -> dict:
    """Dates go over the wire as ISO strings"""
    return {key: value.isoformat() if isinstance(value, date) else value for key, value in payload.items()}


class ApiError(Exception):
    """Non-2xx response; ``message`` is the server's text, verbatim"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class AuthSession:
    """
    Bearer token and signed-in user, persisted in client storage.
    Stored user data that cannot be parsed clears the whole session.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.token: Optional[str] = None
        self.user: Optional[dict] = None
        self._restore()

    def _restore(self) -> None:
        token = self.storage.get_item(TOKEN_KEY)
        raw_user = self.storage.get_item(USER_KEY)
        if not token or not raw_user:
            return
        try:
            user = json.loads(raw_user)
            if not isinstance(user, dict) or "id" not in user:
                raise ValueError("stored user is not an object with an id")
        except ValueError as e:
            logger.warning(f"Discarding stored session: {str(e)}")
            self.clear()
            return
        self.token = token
        self.user = user

    def save(self, token: str, user: dict) -> None:
        self.token = token
        self.user = user
        self.storage.set_item(TOKEN_KEY, token)
        self.storage.set_item(USER_KEY, json.dumps(user))

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def viewer(self) -> Optional[OwnerInfo]:
        if not self.user:
            return None
        return OwnerInfo(id=int(self.user["id"]), role=self.user.get("role"))


class _Resource:
    """Endpoint and cache keys for one resource type"""

    def __init__(self, path: str, detail_key: str, parse: Callable[[dict], Any], embedded_in: tuple = ()):
        self.path = path
        self.list_key = (path,)
        self.detail_key = detail_key
        self.parse = parse
        # Query key prefixes whose payloads embed this resource
        self.embedded_in = embedded_in

    def detail(self, record_id: int) -> tuple:
        return (self.detail_key, record_id)


MOVIE_QUERIES = (("movies",), ("movie",))

DIRECTORS = _Resource("directors", "director", PersonRecord.from_payload, embedded_in=MOVIE_QUERIES)
ACTORS = _Resource("actors", "actor", PersonRecord.from_payload, embedded_in=MOVIE_QUERIES)
MOVIES = _Resource("movies", "movie", MovieRecord.from_payload)


class CatalogClient:
    """
    Args:
        base_url: API root including the prefix, e.g. ``http://host:8000/api``
        session: object with a ``requests``-compatible ``request()`` method
        storage: where the auth session is kept (memory by default)
        timeout: per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[Any] = None,
        storage: Optional[KeyValueStorage] = None,
        timeout: float = DEFAULT_TIMEOUT,
        cache: Optional[QueryCache] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.storage = storage or MemoryStorage()
        self.auth = AuthSession(self.storage)
        self.timeout = timeout
        self.cache = cache or QueryCache()

    # ==================== TRANSPORT ====================

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        headers = {"Accept": "application/json"}
        if self.auth.token:
            headers["Authorization"] = f"Bearer {self.auth.token}"

        kwargs: Dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = _jsonable(payload)

        url = f"{self.base_url}/{path.lstrip('/')}"
        response = self.session.request(method, url, **kwargs)

        if response.status_code >= 400:
            raise ApiError(response.status_code, self._error_message(response))

        logger.debug(f"{method} {path} -> {response.status_code}")
        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            for key in ("detail", "message", "error"):
                if body.get(key):
                    return body[key] if isinstance(body[key], str) else json.dumps(body[key])
        return response.text

    # ==================== AUTH ====================

    def register(self, name: str, email: str, password: str) -> dict:
        """Create an account; does not sign in"""
        return self._request("POST", "auth/register", {"name": name, "email": email, "password": password})

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "auth/login", {"email": email, "password": password})
        self.auth.save(data["access_token"], data["user"])
        self.cache.clear()
        return data["user"]

    def logout(self) -> None:
        self.auth.clear()
        self.cache.clear()

    def me(self) -> dict:
        return self._request("GET", "auth/me")

    # ==================== GENERIC CRUD ====================

    def _list(self, resource: _Resource) -> list:
        cached = self.cache.get(resource.list_key)
        if cached is not None:
            return cached
        records = [resource.parse(item) for item in self._request("GET", resource.path)]
        self.cache.set(resource.list_key, records)
        return records

    def _get(self, resource: _Resource, record_id: int):
        key = resource.detail(record_id)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        record = resource.parse(self._request("GET", f"{resource.path}/{record_id}"))
        self.cache.set(key, record)
        return record

    def _create(self, resource: _Resource, data: dict):
        record = resource.parse(self._request("POST", resource.path, data))
        self.cache.invalidate(resource.list_key)
        return record

    def _invalidate(self, resource: _Resource, record_id: int) -> None:
        """Drop the record's list and detail entries plus every query embedding it"""
        self.cache.invalidate(resource.list_key)
        self.cache.invalidate(resource.detail(record_id))
        for key in resource.embedded_in:
            self.cache.invalidate(key)

    def _update(self, resource: _Resource, record_id: int, data: dict):
        record = resource.parse(self._request("PUT", f"{resource.path}/{record_id}", data))
        self._invalidate(resource, record_id)
        return record

    def _delete(self, resource: _Resource, record_id: int) -> str:
        data = self._request("DELETE", f"{resource.path}/{record_id}")
        self._invalidate(resource, record_id)
        return (data or {}).get("message", "")

    # ==================== DIRECTORS ====================

    def list_directors(self) -> List[PersonRecord]:
        return self._list(DIRECTORS)

    def get_director(self, director_id: int) -> PersonRecord:
        return self._get(DIRECTORS, director_id)

    def create_director(self, data: dict) -> PersonRecord:
        return self._create(DIRECTORS, data)

    def update_director(self, director_id: int, data: dict) -> PersonRecord:
        return self._update(DIRECTORS, director_id, data)

    def delete_director(self, director_id: int) -> str:
        return self._delete(DIRECTORS, director_id)

    # ==================== ACTORS ====================

    def list_actors(self) -> List[PersonRecord]:
        return self._list(ACTORS)

    def get_actor(self, actor_id: int) -> PersonRecord:
        return self._get(ACTORS, actor_id)

    def create_actor(self, data: dict) -> PersonRecord:
        return self._create(ACTORS, data)

    def update_actor(self, actor_id: int, data: dict) -> PersonRecord:
        return self._update(ACTORS, actor_id, data)

    def delete_actor(self, actor_id: int) -> str:
        return self._delete(ACTORS, actor_id)

    # ==================== MOVIES ====================

    def list_movies(self) -> List[MovieRecord]:
        return self._list(MOVIES)

    def get_movie(self, movie_id: int) -> MovieRecord:
        return self._get(MOVIES, movie_id)

    def create_movie(self, data: dict) -> MovieRecord:
        return self._create(MOVIES, data)

    def update_movie(self, movie_id: int, data: dict) -> MovieRecord:
        return self._update(MOVIES, movie_id, data)

    def delete_movie(self, movie_id: int) -> str:
        return self._delete(MOVIES, movie_id)
