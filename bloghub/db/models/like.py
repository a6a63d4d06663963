import uuid
from sqlalchemy import Column, ForeignKey, DateTime, UniqueConstraint, Uuid
from bloghub.db.base import Base
from sqlalchemy.orm import relationship
from bloghub.db.models.user import utcnow


class Like(Base):
    __tablename__ = "likes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id = Column(Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="likes")
    post = relationship("Post", back_populates="likes")

    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),)  # 1 like / user
