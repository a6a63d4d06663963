import uuid
from pydantic import BaseModel, Field
from datetime import datetime


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentOut(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    author_id: uuid.UUID
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


class CommentOutWithAuthor(CommentOut):
    author_name: str
    author_email: str
    likes_count: int = 0
    is_liked: bool = False
