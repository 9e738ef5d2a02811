from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.soft_delete import SoftDeleteMixin


class User(SoftDeleteMixin, Base):
    """
    User model representing account owners.

    Stores authentication credentials and profile information.
    Passwords are stored as hashes (never plaintext).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Email stays reserved while the user is soft-deleted so restore can find it
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    # Timestamps come from the injected clock, not the database server
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Logs (in any soft-delete state) are removed together with their owner
    # on hard delete
    logs = relationship("Log", back_populates="user",
                        cascade="all, delete-orphan", order_by="Log.id")
