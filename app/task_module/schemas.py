from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional
from pydantic import BaseModel, ConfigDict, StringConstraints

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]

class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"

class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

class TaskCreate(BaseModel):
    title: Title
    description: Description
    priority: Optional[TaskPriority] = None

class TaskUpdate(BaseModel):
    title: Optional[Title] = None
    description: Optional[Description] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None

class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class TaskOwner(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str

class TaskWithOwner(TaskOut):
    user: Optional[TaskOwner] = None

class TaskData(BaseModel):
    task: TaskOut

class TaskResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: TaskData

class TaskList(BaseModel):
    tasks: List[TaskOut]

class TaskListResponse(BaseModel):
    success: bool = True
    count: int
    data: TaskList

class AdminTaskList(BaseModel):
    tasks: List[TaskWithOwner]

class AdminTaskListResponse(BaseModel):
    success: bool = True
    count: int
    data: AdminTaskList
