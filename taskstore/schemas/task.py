from pydantic import BaseModel, Field, field_validator
from typing import Optional

class TaskCreate(BaseModel):
    title: str = ""
    content: str = ""

class TaskUpdate(BaseModel):
    # None (or a missing key) keeps the stored value
    assigned_id: Optional[int] = Field(None, ge=0)
    closed: Optional[int] = Field(None, ge=0)
    title: Optional[str] = None
    content: Optional[str] = None

class TaskCreated(BaseModel):
    id: int

class TaskResponse(BaseModel):
    id: int
    opened: int
    closed: int = 0
    author_id: int = 0
    assigned_id: int = 0
    title: str = ""
    content: str = ""

    model_config = {"from_attributes": True}

    @field_validator("closed", "author_id", "assigned_id", mode="before")
    @classmethod
    def _null_as_zero(cls, value):
        return 0 if value is None else value

    @field_validator("title", "content", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value
