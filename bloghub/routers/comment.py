import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from bloghub.core.auth import get_current_identity, optional_auth, require_auth
from bloghub.core.errors import AuthorizationError, NotFoundError
from bloghub.crud import comment as crud
from bloghub.crud.post import get_post
from bloghub.db.session import get_db
from bloghub.schemas.comment import CommentCreate, CommentOut, CommentOutWithAuthor
from bloghub.schemas.token import AuthContext

router = APIRouter()


@router.post("/posts/{post_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def add_comment(
    post_id: uuid.UUID,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(get_current_identity),
):
    if not get_post(db, post_id):
        raise NotFoundError("Post not found")
    return crud.create_comment(db, post_id, identity.user_id, comment_in.content)


@router.get("/posts/{post_id}/comments", response_model=list[CommentOutWithAuthor])
def list_comments(
    post_id: uuid.UUID,
    db: Session = Depends(get_db),
    viewer: Optional[AuthContext] = Depends(optional_auth),
):
    return crud.list_comments(db, post_id, viewer.user_id if viewer else None)


#delete comment
# The comment's author and the author of the post it sits under may both remove it.
@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_auth),
):
    result = crud.get_comment_with_post_author(db, comment_id)
    if not result:
        raise NotFoundError("Comment not found")

    comment, post_author_id = result
    if identity.user_id not in (comment.author_id, post_author_id):
        raise AuthorizationError("You may only delete your own comments or comments on your own posts")

    crud.delete_comment(db, comment)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
