import uuid
from sqlalchemy import Column, String, JSON, TIMESTAMP, Uuid
from app.database import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id        = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email     = Column(String(255), unique=True, nullable=False, index=True)
    name      = Column(String(150), nullable=True)
    photoURL  = Column(String(1000), nullable=True)
    profile   = Column(JSON, default=dict, nullable=False)
    createdAt = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
