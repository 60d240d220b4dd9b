"""
Business logic for users.

Logins and emails are unique.  Both are checked on registration
(email first); on update only a changed login is re-checked, since
the email cannot be changed.  Passwords are stored exactly as
received.
"""

import logging
from typing import List

from ..core.errors import ConflictError, NotFoundError
from ..models import User
from ..repositories.user_repo import UserRepo
from ..schemas.user import UserProfile, UserRead, UserRegister, UserUpdate


logger = logging.getLogger(__name__)


class UserService:
    """Service for registering, reading, patching and deleting users."""

    def __init__(self, user_repo: UserRepo) -> None:
        self.user_repo = user_repo

    def create(self, data: UserRegister) -> str:
        """Register a new user and return its id.

        Raises ``ConflictError`` if the email or the login is already
        taken.  The email is checked first.
        """
        if self.user_repo.exists_by_email(data.email):
            logger.warning("Registration rejected: email %s already exists", data.email)
            raise ConflictError("User with the following email already exists")
        if self.user_repo.exists_by_login(data.login):
            logger.warning("Registration rejected: login %s already exists", data.login)
            raise ConflictError("User with the following login already exists")

        user = User(
            email=data.email,
            password=data.password,
            login=data.login,
            name=data.name,
            state=data.state,
        )
        user = self.user_repo.save(user)
        logger.info("Registered user %s (%s)", user.user_id, user.login)
        return user.user_id

    def get_all(self) -> List[UserRead]:
        return [self.to_read(user) for user in self.user_repo.find_all()]

    def get(self, user_id: str) -> UserRead:
        return self.to_read(self.get_entity(user_id))

    def update(self, user_id: str, data: UserUpdate) -> UserRead:
        """Apply the fields of ``data`` that are not ``None``.

        A new login is accepted only if no other user owns it; on
        conflict nothing is changed.  Name and password are taken
        as given.
        """
        user = self.get_entity(user_id)

        if data.login is not None and data.login != user.login:
            existing = self.user_repo.find_by_login(data.login)
            if existing is not None and existing.user_id != user_id:
                logger.warning("User %s cannot take login %s: already in use", user_id, data.login)
                raise ConflictError("User with the following login already exists")
            user.login = data.login

        if data.user_name is not None:
            user.name = data.user_name
        if data.password is not None:
            user.password = data.password

        self.user_repo.save(user)
        logger.info("Updated user %s", user_id)
        return self.to_read(user)

    def delete(self, user_id: str) -> bool:
        user = self.get_entity(user_id)
        self.user_repo.delete(user)
        logger.info("Deleted user %s", user_id)
        return True

    def get_entity(self, user_id: str) -> User:
        user = self.user_repo.find_by_id(user_id)
        if user is None:
            logger.warning("User %s not found", user_id)
            raise NotFoundError("User", user_id)
        return user

    @staticmethod
    def to_read(user: User) -> UserRead:
        return UserRead(user_id=user.user_id, login=user.login, user_name=user.name, state=user.state)

    @staticmethod
    def to_profile(user: User) -> UserProfile:
        """Projection including the email, for the user's own profile."""
        return UserProfile(
            user_id=user.user_id,
            login=user.login,
            email=user.email,
            user_name=user.name,
            state=user.state,
        )
