from typing import List, Optional
from pydantic import BaseModel, Field

class Error400(BaseModel):
    detail: str = Field("Bad Request", json_schema_extra={"example": "User already exists with this email"})

class FieldError(BaseModel):
    field: Optional[str] = None
    message: str

class ValidationErrorResponse(BaseModel):
    detail: List[FieldError]

class Error401(BaseModel):
    detail: str = Field("Unauthorized", json_schema_extra={"example": "Invalid or expired token"})

class Error403(BaseModel):
    detail: str = Field("Forbidden", json_schema_extra={"example": "Not authorized to access this route"})

class Error404(BaseModel):
    detail: str = Field("Not Found", json_schema_extra={"example": "Task not found"})

class Error503(BaseModel):
    detail: str = Field("Service Unavailable", json_schema_extra={"example": "Logout could not be completed"})

AUTH_RESPONSES = {401: {"model": Error401}, 404: {"model": Error404}}
