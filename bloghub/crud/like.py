import logging
import uuid
from typing import Optional

from sqlalchemy import case, exists, false, func, literal, select, Uuid
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bloghub.core.errors import ConflictError, NotFoundError, StoreError
from bloghub.db.models.comment import Comment
from bloghub.db.models.comment_like import CommentLike
from bloghub.db.models.like import Like
from bloghub.db.models.post import Post
from bloghub.db.models.user import User

# Reserved viewer id meaning "nobody is logged in"
NIL_VIEWER_ID = uuid.UUID(int=0)


def likes_count_column(target_fk, target_id):
    return select(func.count()).where(target_fk == target_id).scalar_subquery()


def is_liked_column(like_model, target_fk, target_id, viewer_id: Optional[uuid.UUID]):
    """Correlated ``is_liked`` flag for the post and comment listings.

    Anonymous readers are mapped to the nil id so both cases run the same query,
    and the nil id always yields false.
    """
    viewer = literal(viewer_id or NIL_VIEWER_ID, Uuid)
    liked_by_viewer = exists().where(target_fk == target_id, like_model.user_id == viewer)
    return case((viewer == literal(NIL_VIEWER_ID, Uuid), false()), else_=liked_by_viewer)


def _insert_like(db: Session, like, target_model, target_fk, target_id: uuid.UUID, user_id: uuid.UUID, label: str):
    """Insert a like, telling a duplicate apart from a missing post, comment or user."""
    like_model = type(like)
    db.add(like)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        existing = db.query(like_model).filter(
            target_fk == target_id,
            like_model.user_id == user_id
        ).first()
        if existing:
            logging.info(f"Rejected duplicate like on {label.lower()} {target_id} by {user_id}")
            raise ConflictError(f"{label} already liked", status_code=400)
        if not db.query(target_model).filter(target_model.id == target_id).first():
            raise NotFoundError(f"{label} not found")
        if not db.query(User).filter(User.id == user_id).first():
            raise NotFoundError("User not found")
        logging.error(f"Database error: {str(e.orig)}")
        raise StoreError("Failed to save like")
    db.refresh(like)
    return like


def like_post(db: Session, post_id: uuid.UUID, user_id: uuid.UUID) -> Like:
    return _insert_like(db, Like(post_id=post_id, user_id=user_id), Post, Like.post_id, post_id, user_id, "Post")


def unlike_post(db: Session, post_id: uuid.UUID, user_id: uuid.UUID) -> int:
    deleted = db.query(Like).filter(
        Like.post_id == post_id,
        Like.user_id == user_id
    ).delete(synchronize_session=False)
    db.commit()
    return deleted


def like_comment(db: Session, comment_id: uuid.UUID, user_id: uuid.UUID) -> CommentLike:
    return _insert_like(
        db,
        CommentLike(comment_id=comment_id, user_id=user_id),
        Comment,
        CommentLike.comment_id,
        comment_id,
        user_id,
        "Comment",
    )


def unlike_comment(db: Session, comment_id: uuid.UUID, user_id: uuid.UUID) -> int:
    deleted = db.query(CommentLike).filter(
        CommentLike.comment_id == comment_id,
        CommentLike.user_id == user_id
    ).delete(synchronize_session=False)
    db.commit()
    return deleted
