from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.soft_delete import SoftDeleteMixin


class Log(SoftDeleteMixin, Base):
    """
    Application log entry submitted by a user.

    send_date is the sender's own timestamp, kept verbatim in the external
    MM/DD/YYYY HH:mm format; created_at is when the record was stored.
    """
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    # Foreign key to owner - every query is scoped by it
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"),
                     nullable=False, index=True)
    level = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    sender_application = Column(String, nullable=False, index=True)
    send_date = Column(String, nullable=False)
    environment = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="logs")
