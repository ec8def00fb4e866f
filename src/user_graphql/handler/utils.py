from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Union

from sqlalchemy.orm import Session
from strawberry import UNSET

from ..logging import get_logger
from ..model.sqlalchemy.user import UserModel

logger = get_logger(__name__)

# INTEGER primary key range (int4)
MIN_USER_ID = -(2 ** 31)
MAX_USER_ID = 2 ** 31 - 1


def parse_user_id(user_id: Union[str, int]) -> Optional[int]:
    """Map an external ``ID`` onto the integer primary key, None if it can't be one."""
    try:
        pk = int(user_id)
    except (TypeError, ValueError):
        return None
    if not MIN_USER_ID <= pk <= MAX_USER_ID:
        return None
    return pk


class UserRepository:
    """Data access for ``UserModel``. Writes are committed immediately."""

    def __init__(self, db: Session):
        self.db = db

    def find_one(self, user_id: Union[str, int]) -> Optional[UserModel]:
        pk = parse_user_id(user_id)
        if pk is None:
            return None
        return self.db.query(UserModel).filter(UserModel.id == pk).first()

    def find_all(self) -> List[UserModel]:
        return self.db.query(UserModel).all()

    def create(self, **fields: Any) -> UserModel:
        return self.save(UserModel(**fields))

    def save(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def remove(self, user: UserModel) -> None:
        self.db.delete(user)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


@dataclass
class UserPatch:
    """Fields supplied to an update. ``UNSET`` means "leave as is"."""

    first_name: Optional[str] = UNSET
    last_name: Optional[str] = UNSET
    age: Optional[int] = UNSET
    email: Optional[str] = UNSET

    def apply_to(self, user: UserModel) -> UserModel:
        if self.first_name is not UNSET:
            user.first_name = self.first_name
        if self.last_name is not UNSET:
            user.last_name = self.last_name
        if self.age is not UNSET:
            user.age = self.age
        if self.email is not UNSET:
            user.email = self.email
        return user


class MutationOutcome(Enum):
    APPLIED = "applied"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class UserService:
    """
    Operations behind the GraphQL resolvers.

    ``update`` and ``delete`` never raise: not-found and persistence errors
    are reported as a ``MutationOutcome``. The other operations let errors
    propagate to the caller.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def get(self, user_id: Union[str, int]) -> Optional[UserModel]:
        return self.repository.find_one(user_id)

    def list(self) -> List[UserModel]:
        return self.repository.find_all()

    def create(self, first_name: str, last_name: str, age: int, email: str) -> UserModel:
        user = self.repository.create(first_name=first_name, last_name=last_name, age=age, email=email)
        logger.info("User created", user_id=user.id)
        return user

    def update(self, user_id: Union[str, int], patch: UserPatch) -> MutationOutcome:
        try:
            user = self.repository.find_one(user_id)
            if user is None:
                logger.info("User to update not found", user_id=user_id)
                return MutationOutcome.NOT_FOUND
            self.repository.save(patch.apply_to(user))
        except Exception as e:
            logger.warning("User update failed", user_id=user_id, error=str(e))
            return MutationOutcome.FAILED
        return MutationOutcome.APPLIED

    def delete(self, user_id: Union[str, int]) -> MutationOutcome:
        try:
            user = self.repository.find_one(user_id)
            if user is None:
                logger.info("User to delete not found", user_id=user_id)
                return MutationOutcome.NOT_FOUND
            self.repository.remove(user)
        except Exception as e:
            logger.warning("User delete failed", user_id=user_id, error=str(e))
            return MutationOutcome.FAILED
        logger.info("User deleted", user_id=user_id)
        return MutationOutcome.APPLIED
