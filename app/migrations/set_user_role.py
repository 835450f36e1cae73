"""
Utility script to promote (or demote) an account.

Usage:
    python -m app.migrations.set_user_role someone@example.com admin
    python -m app.migrations.set_user_role someone@example.com user

Roles cannot be changed through the HTTP API; this is the only way to
create admin accounts.
"""

import sys

from app.database import get_db_session
from app.services.auth_service import AuthService


def set_user_role(email: str, role: str) -> None:
    db = get_db_session()
    try:
        user = AuthService.set_role(db, email, role)
        print(f"User {user.email} (id={user.id}) now has role '{user.role}'")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    set_user_role(sys.argv[1], sys.argv[2])
