from app.models.actor import Actor
from app.services.catalog_service import CatalogService
from app.services.ownership import OwnershipPolicy


class ActorService(CatalogService):
    """Service for actor operations"""

    model = Actor
    policy = OwnershipPolicy(Actor)
    resource_name = "Actor"
    required_fields = ("name", "nationality", "birth_date", "bio")
