import uuid
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional


class PostBase(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    image_url: Optional[str] = None


class PostCreate(PostBase):
    pass


class PostUpdate(BaseModel):
    """Fields a post's author may change. Anything else in the body is rejected."""

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = None

    class Config:
        extra = "forbid"

    @field_validator("title", "content")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class PostOut(PostBase):
    id: uuid.UUID
    author_id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True


class PostOutWithAuthor(PostOut):
    author_name: str
    author_email: str
    likes_count: int = 0
    is_liked: bool = False

    class Config:
        from_attributes = True
