"""
Client-side records parsed from API payloads
Reference fields (owner, director, actors) are resolved at parse time
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Optional
import logging

from app.client.references import Reference, parse_reference

logger = logging.getLogger(__name__)


def parse_date(value: Any) -> Optional[date]:
    """ISO date or datetime string -> date (None when missing or unparseable)"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.debug(f"Ignoring unparseable date {value!r}")
        return None


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Ignoring unparseable timestamp {value!r}")
        return None


def parse_number(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class OwnerInfo:
    id: int
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @classmethod
    def from_payload(cls, data: dict) -> "OwnerInfo":
        return cls(id=int(data["id"]), role=data.get("role"))


def parse_owner(data: dict) -> Optional[Reference]:
    """Owner arrives expanded as ``owner`` or bare as ``user_id``"""
    raw = data.get("owner")
    if raw is None:
        raw = data.get("user_id")
    return parse_reference(raw, OwnerInfo.from_payload)


@dataclass
class PersonRecord:
    """A director or an actor (also used for the sub-objects embedded in movies)"""
    id: int
    name: str
    nationality: Optional[str] = None
    birth_date: Optional[date] = None
    bio: Optional[str] = None
    image_url: Optional[str] = None
    owner: Optional[Reference] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_payload(cls, data: dict) -> "PersonRecord":
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            nationality=data.get("nationality"),
            birth_date=parse_date(data.get("birth_date")),
            bio=data.get("bio"),
            image_url=data.get("image_url"),
            owner=parse_owner(data),
            created_at=parse_datetime(data.get("created_at")),
        )


@dataclass
class MovieRecord:
    id: int
    title: str
    description: Optional[str] = None
    genre: Optional[str] = None
    release_date: Optional[date] = None
    duration: Optional[float] = None
    rating: Optional[float] = None
    director: Optional[Reference] = None
    actors: List[Reference] = field(default_factory=list)
    image_url: Optional[str] = None
    country: Optional[str] = None
    teaser_url: Optional[str] = None
    owner: Optional[Reference] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_payload(cls, data: dict) -> "MovieRecord":
        raw_director = data.get("director")
        if raw_director is None:
            raw_director = data.get("director_id")

        actors = []
        for raw_actor in data.get("actors") or []:
            ref = parse_reference(raw_actor, PersonRecord.from_payload)
            if ref is not None:
                actors.append(ref)

        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            description=data.get("description"),
            genre=data.get("genre"),
            release_date=parse_date(data.get("release_date")),
            duration=parse_number(data.get("duration")),
            rating=parse_number(data.get("rating")),
            director=parse_reference(raw_director, PersonRecord.from_payload),
            actors=actors,
            image_url=data.get("image_url"),
            country=data.get("country"),
            teaser_url=data.get("teaser_url"),
            owner=parse_owner(data),
            created_at=parse_datetime(data.get("created_at")),
        )
