from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.user import _new_id, _utcnow

class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, index=True, default=_new_id)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)
    status = Column(String(16), nullable=False, default="pending", index=True)
    priority = Column(String(16), nullable=False, default="medium", index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user = relationship("User", back_populates="tasks")
