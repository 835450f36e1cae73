from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.utils.dependencies import get_current_user, get_user_id
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.person import ActorCreate, ActorUpdate, ActorResponse
from app.services.actor_service import ActorService

router = APIRouter(prefix="/api/actors", tags=["Actors"])


@router.post("", response_model=ActorResponse, status_code=status.HTTP_201_CREATED)
def create_actor(
    actor_data: ActorCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an actor owned by the current user"""
    return ActorService.create(db, get_user_id(current_user), actor_data)


@router.get("", response_model=List[ActorResponse])
def list_actors(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Actors visible to the current user, newest first"""
    return ActorService.list(db, get_user_id(current_user))


@router.get("/{actor_id}", response_model=ActorResponse)
def get_actor(
    actor_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ActorService.get(db, get_user_id(current_user), actor_id)


@router.put("/{actor_id}", response_model=ActorResponse)
def update_actor(
    actor_id: int,
    actor_data: ActorUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ActorService.update(db, get_user_id(current_user), actor_id, actor_data)


@router.delete("/{actor_id}", response_model=MessageResponse)
def delete_actor(
    actor_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    ActorService.delete(db, get_user_id(current_user), actor_id)
    return {"message": "Actor deleted successfully"}
