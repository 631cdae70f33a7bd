from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from datetime import datetime

class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=256)
    email: EmailStr
    password: str

class UserLogin(CamelModel):
    login_identifier: str = Field(..., min_length=1, description="Email or username")
    password: str = Field(..., min_length=1)

class RefreshTokenRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    refresh_token: str = Field(..., min_length=1)

class AuthResponse(CamelModel):
    user_id: str
    username: str
    email: str
    token: str
    expiration: datetime
    refresh_token: str
    refresh_token_expiration: datetime

class MessageResponse(BaseModel):
    message: str
