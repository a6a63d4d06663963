import uuid
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from bloghub.core.auth import get_current_identity, require_auth
from bloghub.core.errors import NotFoundError
from bloghub.crud import like as crud
from bloghub.crud.comment import get_comment
from bloghub.crud.post import get_post
from bloghub.db.session import get_db
from bloghub.schemas.like import CommentLikeOut, LikeOut
from bloghub.schemas.token import AuthContext

router = APIRouter()


@router.post("/posts/{post_id}/like", response_model=LikeOut, status_code=status.HTTP_201_CREATED)
def like_post(
    post_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(get_current_identity),
):
    if not get_post(db, post_id):
        raise NotFoundError("Post not found")
    return crud.like_post(db, post_id, identity.user_id)


# Unliking something that was never liked still answers 204
@router.delete("/posts/{post_id}/like", status_code=status.HTTP_204_NO_CONTENT)
@router.post("/posts/{post_id}/unlike", status_code=status.HTTP_204_NO_CONTENT)
def unlike_post(
    post_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_auth),
):
    crud.unlike_post(db, post_id, identity.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/comments/{comment_id}/like", response_model=CommentLikeOut, status_code=status.HTTP_201_CREATED)
def like_comment(
    comment_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(get_current_identity),
):
    if not get_comment(db, comment_id):
        raise NotFoundError("Comment not found")
    return crud.like_comment(db, comment_id, identity.user_id)


@router.delete("/comments/{comment_id}/like", status_code=status.HTTP_204_NO_CONTENT)
@router.post("/comments/{comment_id}/unlike", status_code=status.HTTP_204_NO_CONTENT)
def unlike_comment(
    comment_id: uuid.UUID,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_auth),
):
    crud.unlike_comment(db, comment_id, identity.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
