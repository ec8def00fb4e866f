from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session
from typing import Any, Dict, Union

from ..database import get_db
from ..handler.utils import UserRepository

router = APIRouter(tags=['User'], prefix="/users")

class UserSchema(BaseModel):
    id: str
    firstName: str
    lastName: str
    age: int
    email: str

# 定義標準化的回應結構
class SuccessResponse(BaseModel):
    status: str
    data: Union[UserSchema, Dict[str, Any]]

class ErrorResponse(BaseModel):
    status: str
    message: str

@router.get(
        "/api/v1/users/{user_id}",
        summary="Get User by ID",
        response_model=SuccessResponse,
        responses={
            404: {
                "model": ErrorResponse,
                "description": "User not found"
            },
        }
)
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = UserRepository(db).find_one(user_id)
    if user is None:
        return JSONResponse(
            content={
                "status": "error",
                "message": f"User with id {user_id} not found"
            },
            status_code=404,
        )
    return JSONResponse(
            content={
                "status": "success",
                "data": {
                    "id": str(user.id),
                    "firstName": user.first_name,
                    "lastName": user.last_name,
                    "age": user.age,
                    "email": user.email,
                }
            },
            status_code=200,
        )
