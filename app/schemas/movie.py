from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import date, datetime
from typing import Optional, List

from app.schemas.person import OwnerRef, PersonSummary
from app.schemas.validation import SafeStringMixin, strip_required


def unique_ids(ids: List[int]) -> List[int]:
    """Collapse duplicate actor ids, keeping first-seen order"""
    seen = []
    for actor_id in ids:
        if actor_id not in seen:
            seen.append(actor_id)
    return seen


class MovieCreate(BaseModel, SafeStringMixin):
    """Schema for creating a movie"""
    title: str = Field(..., min_length=1, max_length=255)
    genre: str = Field(..., min_length=1, max_length=100)
    release_date: date
    duration: float = Field(..., gt=0, description="Duration in minutes")
    director: int = Field(..., gt=0, description="Director ID")
    actors: List[int] = Field(default_factory=list, description="Actor IDs")
    rating: float = Field(..., ge=0, le=10, description="Rating (0-10)")
    description: str = Field(..., min_length=1, max_length=5000)
    image_url: Optional[str] = Field(None, max_length=500)
    country: Optional[str] = Field(None, max_length=100)
    teaser_url: Optional[str] = Field(None, max_length=500)

    @field_validator('title', 'genre')
    @classmethod
    def clean_short_text(cls, v):
        return cls.validate_no_script(strip_required(v))

    @field_validator('country')
    @classmethod
    def clean_country(cls, v):
        if v is None or not v.strip():
            return None
        return cls.validate_no_script(v.strip())

    @field_validator('description')
    @classmethod
    def clean_description(cls, v):
        return strip_required(cls.sanitize_html(v))

    @field_validator('image_url', 'teaser_url')
    @classmethod
    def clean_urls(cls, v):
        return cls.validate_url(v)

    @field_validator('actors')
    @classmethod
    def dedupe_actors(cls, v):
        return unique_ids(v)


class MovieUpdate(BaseModel, SafeStringMixin):
    """Partial update - only provided fields are merged"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    genre: Optional[str] = Field(None, min_length=1, max_length=100)
    release_date: Optional[date] = None
    duration: Optional[float] = Field(None, gt=0)
    director: Optional[int] = Field(None, gt=0)
    actors: Optional[List[int]] = None
    rating: Optional[float] = Field(None, ge=0, le=10)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    image_url: Optional[str] = Field(None, max_length=500)
    country: Optional[str] = Field(None, max_length=100)
    teaser_url: Optional[str] = Field(None, max_length=500)

    @field_validator('title', 'genre')
    @classmethod
    def clean_short_text(cls, v):
        if v is None:
            return v
        return cls.validate_no_script(strip_required(v))

    @field_validator('country')
    @classmethod
    def clean_country(cls, v):
        if v is None or not v.strip():
            return None
        return cls.validate_no_script(v.strip())

    @field_validator('description')
    @classmethod
    def clean_description(cls, v):
        if v is None:
            return v
        return strip_required(cls.sanitize_html(v))

    @field_validator('image_url', 'teaser_url')
    @classmethod
    def clean_urls(cls, v):
        return cls.validate_url(v)

    @field_validator('actors')
    @classmethod
    def dedupe_actors(cls, v):
        if v is None:
            return v
        return unique_ids(v)


class MovieResponse(BaseModel):
    """Movie with director, actors and owner expanded"""
    id: int
    title: str
    genre: str
    release_date: date
    duration: float
    director: Optional[PersonSummary] = None
    actors: List[PersonSummary] = []
    rating: float
    description: str
    image_url: Optional[str] = None
    country: Optional[str] = None
    teaser_url: Optional[str] = None
    user_id: int
    owner: OwnerRef
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
