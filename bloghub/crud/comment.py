import uuid
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from bloghub.crud.like import is_liked_column, likes_count_column
from bloghub.db.models.comment import Comment
from bloghub.db.models.comment_like import CommentLike
from bloghub.db.models.post import Post
from bloghub.db.models.user import User


def create_comment(db: Session, post_id: uuid.UUID, author_id: uuid.UUID, content: str) -> Comment:
    comment = Comment(post_id=post_id, author_id=author_id, content=content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def get_comment(db: Session, comment_id: uuid.UUID) -> Optional[Comment]:
    return db.query(Comment).filter(Comment.id == comment_id).first()


def get_comment_with_post_author(db: Session, comment_id: uuid.UUID) -> Optional[Tuple[Comment, uuid.UUID]]:
    """Return the comment together with the author id of the post it belongs to."""
    return (
        db.query(Comment, Post.author_id)
        .join(Post, Comment.post_id == Post.id)
        .filter(Comment.id == comment_id)
        .first()
    )


def list_comments(db: Session, post_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> list[dict]:
    rows = (
        db.query(
            Comment,
            User.name.label("author_name"),
            User.email.label("author_email"),
            likes_count_column(CommentLike.comment_id, Comment.id).label("likes_count"),
            is_liked_column(CommentLike, CommentLike.comment_id, Comment.id, viewer_id).label("is_liked"),
        )
        .join(User, Comment.author_id == User.id)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc())
        .all()
    )

    return [
        {
            "id": comment.id,
            "post_id": comment.post_id,
            "author_id": comment.author_id,
            "content": comment.content,
            "created_at": comment.created_at,
            "author_name": author_name,
            "author_email": author_email,
            "likes_count": int(likes_count or 0),
            "is_liked": bool(is_liked),
        }
        for comment, author_name, author_email, likes_count, is_liked in rows
    ]


def delete_comment(db: Session, comment: Comment) -> None:
    db.delete(comment)
    db.commit()
