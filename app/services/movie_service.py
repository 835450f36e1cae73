from typing import Any, Dict
from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload, selectinload

from app.models.movie import Movie
from app.services.actor_service import ActorService
from app.services.catalog_service import CatalogService
from app.services.director_service import DirectorService
from app.services.ownership import OwnershipPolicy, admin_user_ids


class MovieService(CatalogService):
    """
    Service for movie operations
    Movies reference one director and any number of actors; both must be
    readable by the requester under the same visibility rule
    """

    model = Movie
    policy = OwnershipPolicy(Movie)
    resource_name = "Movie"
    required_fields = ("title", "genre", "release_date", "duration", "director", "rating", "description")

    @classmethod
    def _load_options(cls) -> list:
        return [
            joinedload(Movie.owner),
            joinedload(Movie.director),
            selectinload(Movie.actors),
        ]

    @classmethod
    def _prepare_fields(cls, db: Session, user_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        fields = dict(fields)
        if "director" not in fields and "actors" not in fields:
            return fields

        admin_ids = admin_user_ids(db)

        if "director" in fields:
            directors = DirectorService.find_readable(db, user_id, [fields["director"]], admin_ids)
            if not directors:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"director: Director {fields['director']} not found"
                )
            fields["director"] = directors[0]

        if "actors" in fields:
            actor_ids = fields["actors"] or []
            actors = ActorService.find_readable(db, user_id, actor_ids, admin_ids)
            missing = sorted(set(actor_ids) - {actor.id for actor in actors})
            if missing:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"actors: Actor(s) not found: {', '.join(str(i) for i in missing)}"
                )
            fields["actors"] = actors

        return fields
