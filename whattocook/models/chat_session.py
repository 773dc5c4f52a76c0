"""Chat session model for persisting assistant conversations."""

from sqlalchemy import JSON, Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from whattocook.database import Base
from whattocook.models.mixins import TimestampMixin


class ChatSession(Base, TimestampMixin):
    """Stored chat transcript, one per user."""

    __tablename__ = "chat_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    messages = Column(JSON, nullable=False, default=list)

    user = relationship("User")
