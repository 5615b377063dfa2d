from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class PostBase(BaseModel):
    title: str
    sub_heading: Optional[str] = Field(default="", alias="subHeading")
    content: str
    author: str
    date: str
    category: Optional[str] = None

    @field_validator("title", "content", "author", "date")
    @classmethod
    def must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("category")
    @classmethod
    def empty_category_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    model_config = ConfigDict(populate_by_name=True)


class PostCreate(PostBase):
    id: str

    @field_validator("id")
    @classmethod
    def id_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Post id cannot be empty")
        return v


class PostUpdate(PostBase):
    pass


class PostsByAuthorRequest(BaseModel):
    author: str

    @field_validator("author")
    @classmethod
    def author_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Author email is required")
        return v
