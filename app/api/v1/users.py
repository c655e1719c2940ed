from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.common import InsertResult, MessageResponse
from app.schemas.user import UserRegisterRequest
from app.services.user_service import user_service

router = APIRouter(prefix="/users")


# POST /users — no token: runs right after sign-up
@router.post("", status_code=status.HTTP_201_CREATED, summary="Register user (idempotent)",
             response_model=InsertResult | MessageResponse)
def register_user(
    body:     UserRegisterRequest,
    response: Response,
    db:       Session = Depends(get_db),
):
    result, created = user_service.register(db, body)
    if not created:
        response.status_code = status.HTTP_200_OK
    return result
