"""User service for registration, login and profile updates."""

from __future__ import annotations

import logging

from sqlalchemy import select

from contractpro.core.config import get_config
from contractpro.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from contractpro.core.security import hash_password, verify_password
from contractpro.models import User, UserRole
from contractpro.services.base_service import BaseService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class UserService(BaseService):
    """Account management backed by the users table."""

    def get_by_email(self, email: str) -> User | None:
        return self.db.scalars(select(User).where(User.email == email.strip().lower())).first()

    def get_user(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None or not user.is_active:
            raise NotFoundError("User not found")
        return user

    def register(self, name: str, email: str, password: str, role: str | None = None) -> User:
        if self.get_by_email(email) is not None:
            raise ValidationError("User with this email already exists")
        user = User(
            name=name.strip(),
            email=email.strip().lower(),
            hashed_password=hash_password(password, pepper=get_config().PASSWORD_PEPPER),
            role=role or UserRole.FREELANCER.value,
        )
        self.save(user)
        logger.info("user.registered", extra={"event": "user.registered", "user_id": user.id, "role": user.role})
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password, pepper=get_config().PASSWORD_PEPPER):
            logger.warning("user.login_failed", extra={"event": "user.login_failed"})
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")
        user.last_login_at = self.clock()
        self.save(user)
        logger.info("user.logged_in", extra={"event": "user.logged_in", "user_id": user.id})
        return user

    def update_profile(self, user_id: str, name: str) -> User:
        user = self.get_user(user_id)
        user.name = name.strip()
        return self.save(user)
