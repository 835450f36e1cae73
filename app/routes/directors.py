"""
Director Routes - CRUD endpoints for directors
Reads follow the shared visibility rule; writes are owner-only
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.utils.dependencies import get_current_user, get_user_id
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.person import DirectorCreate, DirectorUpdate, DirectorResponse
from app.services.director_service import DirectorService

router = APIRouter(prefix="/api/directors", tags=["Directors"])


@router.post("", response_model=DirectorResponse, status_code=status.HTTP_201_CREATED)
def create_director(
    director_data: DirectorCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a director owned by the current user

    - **name**, **nationality**, **birth_date**, **bio**: required
    - **image_url**: optional
    """
    return DirectorService.create(db, get_user_id(current_user), director_data)


@router.get("", response_model=List[DirectorResponse])
def list_directors(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Directors visible to the current user, newest first"""
    return DirectorService.list(db, get_user_id(current_user))


@router.get("/{director_id}", response_model=DirectorResponse)
def get_director(
    director_id: int = Path(..., description="Director ID"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a director visible to the current user"""
    return DirectorService.get(db, get_user_id(current_user), director_id)


@router.put("/{director_id}", response_model=DirectorResponse)
def update_director(
    director_data: DirectorUpdate,
    director_id: int = Path(..., description="Director ID"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a director owned by the current user (partial update)"""
    return DirectorService.update(db, get_user_id(current_user), director_id, director_data)


@router.delete("/{director_id}", response_model=MessageResponse)
def delete_director(
    director_id: int = Path(..., description="Director ID"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a director owned by the current user"""
    DirectorService.delete(db, get_user_id(current_user), director_id)
    return {"message": "Director deleted successfully"}
