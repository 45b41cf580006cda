from typing import Optional

from nexgen.config import Settings, get_settings
from nexgen.core.constants import NEVER_LOGGED_IN, USER_STORAGE_KEY
from nexgen.core.dates import now_timestamp
from nexgen.core.security import hash_password
from nexgen.repositories.base import EditableCollectionRepository, new_entity_id
from nexgen.schemas.user import User, UserCreate, UserRole, UserStatus, UserUpdate
from nexgen.store.base import KeyValueStore

_SEED_ROWS = (
    {
        "id": "admin-1",
        "username": "Dhruv Jain",
        "email": "dhruv.jain@nexgen.com",
        "password": "admindhruv1234",
        "role": UserRole.ADMIN,
        "created_at": "2023-01-01T00:00:00Z",
    },
    {
        "id": "user-1",
        "username": "John Staff",
        "email": "john.staff@nexgen.com",
        "password": "password123",
        "role": UserRole.USER,
        "created_at": "2023-05-15T00:00:00Z",
    },
)


class UserRepository(EditableCollectionRepository[User]):
    storage_key = USER_STORAGE_KEY
    entity_type = User
    create_type = UserCreate
    update_type = UserUpdate

    def __init__(self, store: KeyValueStore, settings: Optional[Settings] = None):
        super().__init__(store)
        self.settings = settings or get_settings()

    def _hash(self, password: str) -> str:
        return hash_password(password, rounds=self.settings.PASSWORD_PBKDF2_ROUNDS)

    def seed(self):
        stamp = now_timestamp()
        return [
            User(
                **{**row, "password": self._hash(row["password"])},
                status=UserStatus.ACTIVE,
                last_login=stamp,
            )
            for row in _SEED_ROWS
        ]

    def build(self, payload):
        return User(
            **{**payload, "password": self._hash(payload["password"])},
            id=new_entity_id(),
            created_at=now_timestamp(),
            last_login=NEVER_LOGGED_IN,
        )

    def prepare_changes(self, changes):
        password = changes.pop("password", None)
        if password:
            changes["password"] = self._hash(password)
        return changes

    def record_login(self, user_id: str, stamp: Optional[str] = None) -> str:
        stamp = stamp or now_timestamp()
        with self.store.transaction():
            users = self.list()
            for index, user in enumerate(users):
                if user.id == user_id:
                    users[index] = user.model_copy(update={"last_login": stamp})
                    self.save_all(users)
                    break
        return stamp


__all__ = ["UserRepository"]
