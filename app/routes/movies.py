from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.utils.dependencies import get_current_user, get_user_id
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.movie import MovieCreate, MovieUpdate, MovieResponse
from app.services.movie_service import MovieService

router = APIRouter(prefix="/api/movies", tags=["Movies"])


# ============================================
# Movie CRUD
# ============================================

@router.post("", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
def create_movie(
    movie_data: MovieCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a movie owned by the current user

    - **director**: ID of a director visible to the user (required)
    - **actors**: IDs of actors visible to the user (optional)
    - **duration**: minutes, must be positive
    - **rating**: 0 to 10
    """
    return MovieService.create(db, get_user_id(current_user), movie_data)


@router.get("", response_model=List[MovieResponse])
def list_movies(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Movies visible to the current user, newest first

    Director and actors are expanded into sub-objects
    """
    return MovieService.list(db, get_user_id(current_user))


@router.get("/{movie_id}", response_model=MovieResponse)
def get_movie(
    movie_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a movie visible to the current user"""
    return MovieService.get(db, get_user_id(current_user), movie_id)


@router.put("/{movie_id}", response_model=MovieResponse)
def update_movie(
    movie_id: int,
    movie_data: MovieUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update a movie owned by the current user

    Only provided fields are changed; **actors** replaces the whole cast
    """
    return MovieService.update(db, get_user_id(current_user), movie_id, movie_data)


@router.delete("/{movie_id}", response_model=MessageResponse)
def delete_movie(
    movie_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a movie owned by the current user"""
    MovieService.delete(db, get_user_id(current_user), movie_id)
    return {"message": "Movie deleted successfully"}
