import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import utcnow
from app.models.user import User
from app.schemas.common import InsertResult
from app.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

ALREADY_EXISTS = {"message": "User already exists"}


def _find_by_email(db: Session, email: str):
    return db.query(User.id).filter(User.email == email).first()


class UserService:

    def register(self, db: Session, data: UserRegisterRequest) -> tuple[dict, bool]:
        """
        Idempotent registration keyed on email.
        Returns (result, created); an existing email is left untouched.
        """
        email = data.email
        if _find_by_email(db, email):
            return ALREADY_EXISTS, False

        u = User(
            email=email,
            name=data.name,
            photoURL=data.photoURL,
            profile=data.extra_profile(),
            createdAt=utcnow(),
        )
        db.add(u)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent registration inserted the same email first
            db.rollback()
            logger.info(f"Registration race on {email}; keeping the existing user")
            return ALREADY_EXISTS, False

        logger.info(f"User {u.id} registered ({email})")
        return InsertResult(insertedId=str(u.id)).model_dump(), True


user_service = UserService()
