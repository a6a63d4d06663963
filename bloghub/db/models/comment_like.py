import uuid
from sqlalchemy import Column, ForeignKey, DateTime, UniqueConstraint, Uuid
from bloghub.db.base import Base
from sqlalchemy.orm import relationship
from bloghub.db.models.user import utcnow


class CommentLike(Base):
    __tablename__ = "comment_likes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    comment_id = Column(Uuid, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="comment_likes")
    comment = relationship("Comment", back_populates="likes")

    __table_args__ = (UniqueConstraint("comment_id", "user_id", name="uq_comment_likes_comment_user"),)
