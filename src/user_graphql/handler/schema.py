import strawberry
from typing import List, Optional

from strawberry.types import Info

from ..model.graphql.user import User
from .utils import MutationOutcome, UserPatch, UserService


def get_service(info: Info) -> UserService:
    return info.context["users"]


@strawberry.type
class Query:
    @strawberry.field
    def hello(self, name: Optional[str] = strawberry.UNSET) -> str:
        return f"Hellssso {name or 'World'}"

    @strawberry.field
    def user(self, info: Info, id: strawberry.ID) -> User:
        user = get_service(info).get(id)
        if user is None:
            # kept as None despite `-> User`; the non-null field turns it into a GraphQL error
            return None
        return User.from_model(user)

    @strawberry.field
    def users(self, info: Info) -> List[User]:
        return [User.from_model(user) for user in get_service(info).list()]


@strawberry.type
class Mutation:
    @strawberry.mutation
    def create_user(self, info: Info, first_name: str, last_name: str, age: int, email: str) -> User:
        user = get_service(info).create(first_name=first_name, last_name=last_name, age=age, email=email)
        return User.from_model(user)

    @strawberry.mutation
    def update_user(
        self,
        info: Info,
        id: strawberry.ID,
        first_name: Optional[str] = strawberry.UNSET,
        last_name: Optional[str] = strawberry.UNSET,
        age: Optional[int] = strawberry.UNSET,
        email: Optional[str] = strawberry.UNSET,
    ) -> bool:
        patch = UserPatch(first_name=first_name, last_name=last_name, age=age, email=email)
        return get_service(info).update(id, patch) is MutationOutcome.APPLIED

    @strawberry.mutation
    def delete_user(self, info: Info, id: strawberry.ID) -> bool:
        return get_service(info).delete(id) is MutationOutcome.APPLIED


schema = strawberry.Schema(query=Query, mutation=Mutation)
