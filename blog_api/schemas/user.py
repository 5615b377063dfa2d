from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, field_validator

from blog_api.schemas.auth import check_not_blank, check_password


class RoleUpdate(BaseModel):
    role: str


class StatusUpdate(BaseModel):
    is_disabled: StrictBool = Field(alias="isDisabled")

    model_config = ConfigDict(populate_by_name=True)


class ManageAllBlogsUpdate(BaseModel):
    can_manage_all_blogs: StrictBool = Field(alias="canManageAllBlogs")

    model_config = ConfigDict(populate_by_name=True)


class DisplayNameUpdate(BaseModel):
    display_name: str = Field(alias="displayName")

    @field_validator("display_name")
    @classmethod
    def name_must_not_be_empty(cls, v):
        return check_not_blank(v).strip()

    model_config = ConfigDict(populate_by_name=True)


class EmailUpdate(BaseModel):
    email: EmailStr


class PasswordUpdate(BaseModel):
    password: str

    @field_validator("password")
    @classmethod
    def password_must_be_valid(cls, v):
        return check_password(v)


class PhotoURLUpdate(BaseModel):
    photo_url: str = Field(alias="photoURL")

    @field_validator("photo_url")
    @classmethod
    def photo_must_not_be_empty(cls, v):
        return check_not_blank(v)

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    message: str
