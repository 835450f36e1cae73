"""
Owner/requester checks with no database or framework imports
Shared by the server's ownership policy and the client's control gating
"""
from typing import Collection, Optional


def can_read(owner_id: Optional[int], requester_id: int, admin_ids: Collection[int]) -> bool:
    # Admins may view any user's record; writing stays owner-only
    if requester_id in admin_ids:
        return True
    if owner_id is None:
        return False
    return owner_id == requester_id or owner_id in admin_ids


def can_write(owner_id: Optional[int], requester_id: int) -> bool:
    return owner_id is not None and owner_id == requester_id
