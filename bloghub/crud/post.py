import uuid
from typing import Optional

from sqlalchemy.orm import Session

from bloghub.crud.like import is_liked_column, likes_count_column
from bloghub.db.models.like import Like
from bloghub.db.models.post import Post
from bloghub.db.models.user import User
from bloghub.schemas.post import PostCreate, PostUpdate


def create_post(db: Session, author_id: uuid.UUID, post_in: PostCreate) -> Post:
    new_post = Post(
        author_id=author_id,
        title=post_in.title,
        content=post_in.content,
        image_url=post_in.image_url,
    )
    db.add(new_post)
    db.commit()
    db.refresh(new_post)
    return new_post


def get_post(db: Session, post_id: uuid.UUID) -> Optional[Post]:
    return db.query(Post).filter(Post.id == post_id).first()


def _posts_with_author(db: Session, viewer_id: Optional[uuid.UUID]):
    # author, like count and viewer flag in one round trip
    return (
        db.query(
            Post,
            User.name.label("author_name"),
            User.email.label("author_email"),
            likes_count_column(Like.post_id, Post.id).label("likes_count"),
            is_liked_column(Like, Like.post_id, Post.id, viewer_id).label("is_liked"),
        )
        .join(User, Post.author_id == User.id)
    )


def _row_to_dict(row) -> dict:
    post, author_name, author_email, likes_count, is_liked = row
    return {
        "id": post.id,
        "author_id": post.author_id,
        "title": post.title,
        "content": post.content,
        "image_url": post.image_url,
        "created_at": post.created_at,
        "author_name": author_name,
        "author_email": author_email,
        "likes_count": int(likes_count or 0),
        "is_liked": bool(is_liked),
    }


def list_posts(db: Session, viewer_id: Optional[uuid.UUID] = None) -> list[dict]:
    rows = _posts_with_author(db, viewer_id).order_by(Post.created_at.desc()).all()
    return [_row_to_dict(row) for row in rows]


def get_post_with_author(db: Session, post_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> Optional[dict]:
    row = _posts_with_author(db, viewer_id).filter(Post.id == post_id).first()
    return _row_to_dict(row) if row else None


def update_post(db: Session, post: Post, changes: PostUpdate) -> Post:
    # PostUpdate only carries title, content and image_url
    for key, value in changes.changes().items():
        setattr(post, key, value)
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post: Post) -> None:
    db.delete(post)
    db.commit()
