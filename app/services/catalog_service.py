"""
Catalog Service - shared CRUD logic for directors, actors and movies
Each resource subclasses CatalogService and only declares its model,
names and (for movies) how reference fields are resolved
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple
import logging

from fastapi import HTTPException, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.services.ownership import OwnershipPolicy

logger = logging.getLogger(__name__)


@contextmanager
def persistence_errors(db: Session, action: str):
    """Roll back and surface database failures as 500 with the raw error text"""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


class CatalogService:
    """Base service - subclasses set model, policy and resource names"""

    model: Any = None
    policy: OwnershipPolicy = None
    resource_name: str = "Record"
    # Columns that must never be set to null through an update
    required_fields: Tuple[str, ...] = ()

    @classmethod
    def _load_options(cls) -> list:
        """Relationships expanded in every response"""
        return [joinedload(cls.model.owner)]

    @classmethod
    def _prepare_fields(cls, db: Session, user_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Turn validated input into model attributes (hook for reference fields)"""
        return fields

    @classmethod
    def _not_found(cls) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{cls.resource_name} not found"
        )

    @classmethod
    def _not_found_or_unauthorized(cls) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{cls.resource_name} not found or unauthorized"
        )

    @classmethod
    def list(cls, db: Session, user_id: int) -> List[Any]:
        """Records readable by the requester, newest first"""
        with persistence_errors(db, f"list {cls.resource_name.lower()}s"):
            return cls.policy.readable_query(db, user_id).options(
                *cls._load_options()
            ).order_by(
                cls.model.created_at.desc(),
                cls.model.id.desc()
            ).all()

    @classmethod
    def get(cls, db: Session, user_id: int, record_id: int) -> Any:
        """Single record under the read rule"""
        with persistence_errors(db, f"get {cls.resource_name.lower()}"):
            record = cls.policy.readable_query(db, user_id).options(
                *cls._load_options()
            ).filter(cls.model.id == record_id).first()

        if not record:
            raise cls._not_found()
        return record

    @classmethod
    def create(cls, db: Session, user_id: int, data: BaseModel) -> Any:
        """Create a record owned by the requester"""
        with persistence_errors(db, f"create {cls.resource_name.lower()}"):
            fields = cls._prepare_fields(db, user_id, data.model_dump())
            record = cls.model(**fields, user_id=user_id)
            db.add(record)
            db.commit()
            db.refresh(record)

        logger.info(f"{cls.resource_name} {record.id} created by user {user_id}")
        return cls.get(db, user_id, record.id)

    @classmethod
    def update(cls, db: Session, user_id: int, record_id: int, data: BaseModel) -> Any:
        """Merge the provided fields into a record the requester owns"""
        record = cls._get_owned(db, user_id, record_id)

        changes = data.model_dump(exclude_unset=True)
        for field in cls.required_fields:
            if field in changes and changes[field] is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{field}: Field cannot be null"
                )

        with persistence_errors(db, f"update {cls.resource_name.lower()}"):
            for key, value in cls._prepare_fields(db, user_id, changes).items():
                setattr(record, key, value)
            db.commit()

        return cls.get(db, user_id, record_id)

    @classmethod
    def delete(cls, db: Session, user_id: int, record_id: int) -> None:
        """Delete a record the requester owns"""
        record = cls._get_owned(db, user_id, record_id)

        with persistence_errors(db, f"delete {cls.resource_name.lower()}"):
            db.delete(record)
            db.commit()

        logger.info(f"{cls.resource_name} {record_id} deleted by user {user_id}")

    @classmethod
    def _get_owned(cls, db: Session, user_id: int, record_id: int) -> Any:
        with persistence_errors(db, f"find {cls.resource_name.lower()}"):
            record = cls.policy.writable_query(db, user_id).filter(
                cls.model.id == record_id
            ).first()

        if not record:
            raise cls._not_found_or_unauthorized()
        return record

    @classmethod
    def find_readable(cls, db: Session, user_id: int, ids: List[int], admin_ids: Optional[List[int]] = None) -> List[Any]:
        """Records among ``ids`` the requester may reference"""
        if not ids:
            return []
        if admin_ids is None:
            query = cls.policy.readable_query(db, user_id)
        else:
            query = db.query(cls.model).filter(cls.policy.readable_clause(user_id, admin_ids))
        return query.filter(cls.model.id.in_(ids)).all()
