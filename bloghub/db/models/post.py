import uuid
from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Index, Uuid
from sqlalchemy.orm import relationship
from bloghub.db.base import Base
from bloghub.db.models.user import utcnow


class Post(Base):
    __tablename__ = "posts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    author = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan", passive_deletes=True)
    likes = relationship("Like", back_populates="post", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (Index("idx_posts_created_at", created_at.desc()),)
