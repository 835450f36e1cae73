"""
Director and Actor schemas
Both resources share the same shape, so the field rules live in one base
"""
from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import date, datetime
from typing import Optional

from app.schemas.validation import SafeStringMixin, strip_required


class OwnerRef(BaseModel):
    """Expanded owner reference (id and role of the creating user)"""
    id: int
    role: str

    model_config = ConfigDict(from_attributes=True)


class PersonBase(BaseModel, SafeStringMixin):
    name: str = Field(..., min_length=1, max_length=255)
    nationality: str = Field(..., min_length=1, max_length=100)
    birth_date: date
    bio: str = Field(..., min_length=1, max_length=5000)
    image_url: Optional[str] = Field(None, max_length=500)

    @field_validator('name', 'nationality')
    @classmethod
    def clean_short_text(cls, v):
        return cls.validate_no_script(strip_required(v))

    @field_validator('bio')
    @classmethod
    def clean_bio(cls, v):
        return strip_required(cls.sanitize_html(v))

    @field_validator('image_url')
    @classmethod
    def clean_image_url(cls, v):
        return cls.validate_url(v)


class PersonUpdate(BaseModel, SafeStringMixin):
    """Partial update - only provided fields are merged"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    nationality: Optional[str] = Field(None, min_length=1, max_length=100)
    birth_date: Optional[date] = None
    bio: Optional[str] = Field(None, min_length=1, max_length=5000)
    image_url: Optional[str] = Field(None, max_length=500)

    @field_validator('name', 'nationality')
    @classmethod
    def clean_short_text(cls, v):
        if v is None:
            return v
        return cls.validate_no_script(strip_required(v))

    @field_validator('bio')
    @classmethod
    def clean_bio(cls, v):
        if v is None:
            return v
        return strip_required(cls.sanitize_html(v))

    @field_validator('image_url')
    @classmethod
    def clean_image_url(cls, v):
        return cls.validate_url(v)


class PersonResponse(BaseModel):
    id: int
    name: str
    nationality: str
    birth_date: date
    bio: str
    image_url: Optional[str] = None
    user_id: int
    owner: OwnerRef
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PersonSummary(BaseModel):
    """Director/actor sub-object embedded in movie responses"""
    id: int
    name: str
    image_url: Optional[str] = None
    nationality: str
    bio: str

    model_config = ConfigDict(from_attributes=True)


# ==================== DIRECTOR SCHEMAS ====================

class DirectorCreate(PersonBase):
    """Schema for creating a director"""


class DirectorUpdate(PersonUpdate):
    """Schema for updating a director"""


class DirectorResponse(PersonResponse):
    """Schema for director response"""


# ==================== ACTOR SCHEMAS ====================

class ActorCreate(PersonBase):
    """Schema for creating an actor"""


class ActorUpdate(PersonUpdate):
    """Schema for updating an actor"""


class ActorResponse(PersonResponse):
    """Schema for actor response"""
