import logging
from typing import Optional

from nexgen.config import Settings
from nexgen.core.security import verify_password
from nexgen.repositories.user_repository import UserRepository
from nexgen.schemas.user import User, UserStatus
from nexgen.store.base import KeyValueStore

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: KeyValueStore, settings: Optional[Settings] = None):
        self.users = UserRepository(store, settings=settings)

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the logged-in user, or ``None`` for any kind of failure.

        Wrong credentials and inactive accounts look the same to the caller.
        """
        lookup = (username or "").strip().casefold()
        if not lookup or not password:
            return None

        for user in self.users.list():
            if user.username.strip().casefold() != lookup:
                continue
            if not verify_password(password, user.password):
                continue
            if user.status != UserStatus.ACTIVE:
                break
            stamp = self.users.record_login(user.id)
            logger.info("User %s logged in", user.id)
            return user.model_copy(update={"last_login": stamp})

        logger.info("Login rejected")
        return None


__all__ = ["AuthService"]
