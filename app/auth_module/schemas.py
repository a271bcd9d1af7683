from datetime import datetime
from enum import Enum
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

class Role(str, Enum):
    user = "user"
    admin = "admin"

class RegisterRequest(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
    email: EmailStr
    password: str = Field(min_length=6)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class UserInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: Role

class UserDetail(UserInfo):
    created_at: Optional[datetime] = None

class AuthData(BaseModel):
    user: UserInfo
    token: str

class AuthResponse(BaseModel):
    success: bool = True
    message: str
    data: AuthData

class UserData(BaseModel):
    user: UserInfo

class MeResponse(BaseModel):
    success: bool = True
    data: UserData

class MessageResponse(BaseModel):
    success: bool = True
    message: str
