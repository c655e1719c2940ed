import uuid
from sqlalchemy import Column, String, Text, Float, TIMESTAMP, Uuid
from app.database import Base, utcnow


DEFAULT_AVAILABILITY = "Available"


class Vehicle(Base):
    __tablename__ = "vehicles"

    id           = Column(Uuid, primary_key=True, default=uuid.uuid4)
    vehicleName  = Column(String(200), nullable=False)
    owner        = Column(String(150), nullable=True)
    category     = Column(String(100), nullable=False, index=True)
    pricePerDay  = Column(Float, default=0, nullable=False, index=True)
    location     = Column(String(200), nullable=False, index=True)
    availability = Column(String(50), default=DEFAULT_AVAILABILITY, nullable=False)
    description  = Column(Text, default="", nullable=False)
    coverImage   = Column(String(1000), default="", nullable=False)
    # Owning identity, copied from the verified token at insert time
    userEmail    = Column(String(255), nullable=False, index=True)
    createdAt    = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False, index=True)
    updatedAt    = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Vehicle id={self.id} name={self.vehicleName} owner={self.userEmail}>"
