import uuid
from sqlalchemy import Column, String, Float, Date, TIMESTAMP, Uuid
from app.database import Base, utcnow


class Booking(Base):
    __tablename__ = "bookings"

    id         = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Plain reference, no FK: a booking may outlive its vehicle
    vehicleId  = Column(Uuid, nullable=False, index=True)
    userEmail  = Column(String(255), nullable=False, index=True)
    startDate  = Column(Date, nullable=True)
    endDate    = Column(Date, nullable=True)
    totalPrice = Column(Float, default=0, nullable=False)
    createdAt  = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Booking id={self.id} vehicleId={self.vehicleId} user={self.userEmail}>"
