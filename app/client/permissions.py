"""
Edit/delete control gating for list and detail views

The rule shown to users is wider than what the server accepts: an admin
sees edit/delete controls on any admin-created record, but the server
only lets the record's own owner update or delete it and answers 404 for
everyone else. The mismatch is known and kept until the product decides
which side is right.
"""
from typing import Optional

from app.client.records import OwnerInfo
from app.client.references import Id, Reference, expanded_value, reference_id
from app.utils.access import can_write


def is_admin_created(owner: Optional[Reference], viewer: OwnerInfo) -> bool:
    """
    Whether a record counts as admin-created for the viewer.
    A bare owner id carries no role, so it counts only when the viewer is admin.
    """
    info = expanded_value(owner)
    if info is not None:
        return info.is_admin
    return isinstance(owner, Id) and viewer.is_admin


def shows_manage_controls(owner: Optional[Reference], viewer: Optional[OwnerInfo]) -> bool:
    if viewer is None:
        return False
    if reference_id(owner) == viewer.id:
        return True
    return viewer.is_admin and is_admin_created(owner, viewer)


def server_allows_write(owner: Optional[Reference], viewer: Optional[OwnerInfo]) -> bool:
    """The server's write rule, for callers that want to hide doomed controls"""
    if viewer is None:
        return False
    return can_write(reference_id(owner), viewer.id)
