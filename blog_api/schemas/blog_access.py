from pydantic import BaseModel, ConfigDict, Field, field_validator


class BlogAccessRequest(BaseModel):
    user_uid: str = Field(alias="userUid")
    post_id: str = Field(alias="postId")

    @field_validator("user_uid", "post_id")
    @classmethod
    def must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("User UID and Post ID are required")
        return v

    model_config = ConfigDict(populate_by_name=True)


class BlogAccessCheck(BaseModel):
    hasAccess: bool
