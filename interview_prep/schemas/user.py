from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime

from interview_prep.schemas.base import CamelModel


class UserCreate(CamelModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    profile_image_url: Optional[str] = None


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    id: int
    full_name: str
    email: str
    profile_image_url: Optional[str] = None
    profile_description: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    id: int
    user: UserResponse
    token: str


class ProfileDescriptionUpdate(CamelModel):
    profile_description: str


class ImageUploadResponse(CamelModel):
    image_url: str
