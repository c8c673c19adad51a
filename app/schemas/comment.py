#app/schemas/comment.py
from pydantic import BaseModel, Field, ConfigDict, constr
from typing import List
from app.schemas.types import UtcDatetime

from app.schemas.user import UserShort

class CommentCreate(BaseModel):
    """
    CommentCreate — новый комментарий к задаче.
    """
    content: constr(min_length=1) = Field(..., examples=["Looks good to me"], description="Текст комментария")
    mentions: List[int] = Field(default_factory=list, description="ID упомянутых пользователей")

class MentionRead(BaseModel):
    id: int
    user_id: int
    user: UserShort

    model_config = ConfigDict(from_attributes=True)

class CommentRead(BaseModel):
    id: int
    task_id: int
    author_id: int
    content: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
    author: UserShort
    mentions: List[MentionRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
