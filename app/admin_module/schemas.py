from typing import List
from pydantic import BaseModel
from app.auth_module.schemas import Role, UserDetail, UserInfo

class RoleUpdateRequest(BaseModel):
    role: Role

class UserListData(BaseModel):
    users: List[UserDetail]

class UserListResponse(BaseModel):
    success: bool = True
    count: int
    data: UserListData

class RoleUpdateData(BaseModel):
    user: UserInfo

class RoleUpdateResponse(BaseModel):
    success: bool = True
    message: str
    data: RoleUpdateData
