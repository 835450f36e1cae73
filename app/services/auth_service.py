from sqlalchemy.orm import Session
from app.models.user import User, ROLES
from app.schemas.auth import UserRegister, UserLogin
from app.utils.security import hash_password, verify_password, create_user_token
from fastapi import HTTPException, status
from datetime import timedelta
import os
import logging
from typing import cast

logger = logging.getLogger(__name__)
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30))

class AuthService:
    @staticmethod
    def register_user(db: Session, user_data: UserRegister) -> User:
        # Check existing email
        existing_user = db.query(User).filter(User.email == user_data.email).first()
        if existing_user:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

        # New accounts are always plain users; admins are promoted out of band
        new_user = User(
            email=user_data.email,
            password_hash=hash_password(user_data.password),
            name=user_data.name
        )
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
        logger.info(f"Registered user {new_user.id}")
        return new_user

    @staticmethod
    def login_user(db: Session, credentials: UserLogin) -> dict:
        user = db.query(User).filter(User.email == credentials.email).first()

        if not user:
            logger.warning(f"Login failed: User not found with email {credentials.email}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")

        if not verify_password(credentials.password, str(user.password_hash)):
            logger.warning(f"Login failed: Incorrect password for email {credentials.email}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")

        if not cast(bool, user.is_active):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated")

        access_token = create_user_token(
            user,
            expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
        )

        return {
            "access_token": access_token,
            "token_type": "bearer",
            "expires_in": ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user": user
        }

    @staticmethod
    def set_role(db: Session, email: str, role: str) -> User:
        """Change an account's role (used by the set_user_role script only)"""
        if role not in ROLES:
            raise ValueError(f"Unknown role '{role}'. Allowed: {', '.join(ROLES)}")

        user = db.query(User).filter(User.email == email).first()
        if not user:
            raise LookupError(f"No user registered with email {email}")

        user.role = role  # type: ignore
        db.commit()
        db.refresh(user)
        logger.info(f"User {user.id} role set to {role}")
        return user
