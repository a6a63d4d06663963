import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from bloghub.core.auth import get_current_identity, optional_auth, require_auth
from bloghub.core.errors import AuthorizationError, NotFoundError, ValidationError
from bloghub.crud import post as crud
from bloghub.db.session import get_db
from bloghub.schemas.post import PostCreate, PostOut, PostOutWithAuthor, PostUpdate
from bloghub.schemas.token import AuthContext

router = APIRouter()


def get_owned_post(db: Session, post_id: uuid.UUID, identity: AuthContext, action: str):
    """Load a post and check that the caller wrote it."""
    post = crud.get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found")
    if post.author_id != identity.user_id:
        raise AuthorizationError(f"You may only {action} your own posts")
    return post


@router.get("", response_model=list[PostOutWithAuthor])
def list_posts(
    db: Session = Depends(get_db),
    viewer: Optional[AuthContext] = Depends(optional_auth),
):
    return crud.list_posts(db, viewer.user_id if viewer else None)


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
def create_post(
    post_in: PostCreate,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(get_current_identity),
):
    return crud.create_post(db, identity.user_id, post_in)


@router.get("/{post_id}", response_model=PostOutWithAuthor)
def get_post(
    post_id: uuid.UUID,
    db: Session = Depends(get_db),
    viewer: Optional[AuthContext] = Depends(optional_auth),
):
    post = crud.get_post_with_author(db, post_id, viewer.user_id if viewer else None)
    if not post:
        raise NotFoundError("Post not found")
    return post


@router.api_route("/{post_id}", methods=["PUT", "PATCH"], response_model=PostOut)
def update_post(
    post_id: uuid.UUID,
    changes: PostUpdate,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_auth),
):
    post = get_owned_post(db, post_id, identity, "edit")
    if not changes.changes():
        raise ValidationError("No fields to update")
    return crud.update_post(db, post, changes)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_auth),
):
    post = get_owned_post(db, post_id, identity, "delete")
    crud.delete_post(db, post)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
