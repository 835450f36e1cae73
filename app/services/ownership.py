"""
Ownership & Visibility Policy
=============================
One rule shared by directors, actors and movies.

Read:  a record is visible when its owner is the requester, when its owner
       is any admin account (admin-shared records), or when the requester
       is an admin.
Write: update/delete only when the owner is the requester, whatever the
       requester's role.

A record that fails either rule is reported as not found, so callers cannot
tell "absent" from "owned by someone else".
"""
from typing import Any, Callable, Collection, List, Optional

from sqlalchemy import or_, true
from sqlalchemy.orm import Session

from app.models.user import User, ROLE_ADMIN
from app.utils.access import can_read, can_write


def admin_user_ids(db: Session) -> List[int]:
    """Resolve the ids of every admin account (run once per list/get request)"""
    return [row.id for row in db.query(User.id).filter(User.role == ROLE_ADMIN).all()]


class OwnershipPolicy:
    """
    Visibility rule bound to one entity type.

    Args:
        model: SQLAlchemy model carrying the owner column
        owner_of: how to read the owner id from a loaded entity
            (defaults to ``entity.user_id``)
    """

    def __init__(self, model: Any, owner_of: Optional[Callable[[Any], Optional[int]]] = None):
        self.model = model
        self.owner_of = owner_of or (lambda entity: entity.user_id)

    @property
    def owner_column(self):
        return self.model.user_id

    def readable_clause(self, requester_id: int, admin_ids: Collection[int]):
        """SQL form of the read rule"""
        # Admins may view any user's record; writing stays owner-only
        if requester_id in admin_ids:
            return true()
        clauses = [self.owner_column == requester_id]
        if admin_ids:
            clauses.append(self.owner_column.in_(list(admin_ids)))
        return or_(*clauses)

    def writable_clause(self, requester_id: int):
        """SQL form of the write rule"""
        return self.owner_column == requester_id

    def readable_query(self, db: Session, requester_id: int):
        admin_ids = admin_user_ids(db)
        return db.query(self.model).filter(self.readable_clause(requester_id, admin_ids))

    def writable_query(self, db: Session, requester_id: int):
        return db.query(self.model).filter(self.writable_clause(requester_id))

    def can_read(self, entity: Any, requester_id: int, admin_ids: Collection[int]) -> bool:
        return can_read(self.owner_of(entity), requester_id, admin_ids)

    def can_write(self, entity: Any, requester_id: int) -> bool:
        return can_write(self.owner_of(entity), requester_id)
