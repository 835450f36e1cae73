from app.models.director import Director
from app.services.catalog_service import CatalogService
from app.services.ownership import OwnershipPolicy


class DirectorService(CatalogService):
    """Service for director operations"""

    model = Director
    policy = OwnershipPolicy(Director)
    resource_name = "Director"
    required_fields = ("name", "nationality", "birth_date", "bio")
