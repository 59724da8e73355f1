# profile.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from waysbucks.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    phone = Column(String(32), nullable=False, default="")
    address = Column(String(255), nullable=False, default="")
    city = Column(String(100), nullable=False, default="")
    postal_code = Column(Integer, nullable=False, default=0)
    image = Column(String(512), nullable=True)
    # One profile per user.
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="profile")
