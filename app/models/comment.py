#app/models/comment.py
from datetime import datetime
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import Base, utcnow

class Comment(Base):
    """
    Comment — комментарий к задаче, может упоминать пользователей.
    """
    __tablename__ = "comments"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    task_id: int = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id: int = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content: str = Column(Text, nullable=False, doc="Текст комментария")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    task = relationship("Task", back_populates="comments")
    author = relationship("User")
    mentions = relationship("Mention", back_populates="comment", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Comment(id={self.id}, task_id={self.task_id}, author_id={self.author_id})>"

class Mention(Base):
    """
    Mention — упоминание пользователя в комментарии.
    """
    __tablename__ = "mentions"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    comment_id: int = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    comment = relationship("Comment", back_populates="mentions")
    user = relationship("User")
