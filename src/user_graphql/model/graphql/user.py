import strawberry

from ..sqlalchemy.user import UserModel


@strawberry.type
class User:
    id: strawberry.ID
    first_name: str
    last_name: str
    age: int
    email: str

    @classmethod
    def from_model(cls, user: UserModel) -> "User":
        return cls(
            id=strawberry.ID(str(user.id)),
            first_name=user.first_name,
            last_name=user.last_name,
            age=user.age,
            email=user.email,
        )
