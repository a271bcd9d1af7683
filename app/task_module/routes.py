import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.deps import get_current_user, require_roles
from app.models.user import ROLE_ADMIN
from app.task_module import logic as task_logic
from app.task_module import schemas as task_schemas
from app.auth_module import schemas as auth_schemas
from app.schemas.errors import AUTH_RESPONSES, Error403, Error404, ValidationErrorResponse


router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])

TASK_NOT_FOUND = "Task not found"


@router.get("", status_code=200,
            summary="List tasks", description="List the current user's tasks, newest first.",
            response_model=task_schemas.TaskListResponse,
            responses=AUTH_RESPONSES,
            operation_id="list_tasks")
def list_tasks(
    status: Optional[task_schemas.TaskStatus] = None,
    priority: Optional[task_schemas.TaskPriority] = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    tasks = task_logic.list_tasks(
        db,
        current_user.id,
        status=status.value if status else None,
        priority=priority.value if priority else None,
    )
    return {"count": len(tasks), "data": {"tasks": tasks}}


@router.post("", status_code=201,
            summary="Create task", description="Create a task owned by the current user.",
            response_model=task_schemas.TaskResponse,
            responses={**AUTH_RESPONSES, 400: {"model": ValidationErrorResponse}},
            operation_id="create_task")
def create_task(
    payload: task_schemas.TaskCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    task = task_logic.create_task(db, current_user.id, payload)
    logging.info(f"Task created: {task.id} by user: {current_user.email}")
    return {"message": "Task created successfully", "data": {"task": task}}


@router.get("/admin/all", status_code=200,
            summary="List all tasks", description="Every task in the system with its owner. Admin only.",
            response_model=task_schemas.AdminTaskListResponse,
            responses={**AUTH_RESPONSES, 403: {"model": Error403}},
            operation_id="list_all_tasks")
def list_all_tasks(
    db: Session = Depends(get_db),
    _context=Depends(require_roles(ROLE_ADMIN)),
):
    tasks = task_logic.list_all_tasks(db)
    return {"count": len(tasks), "data": {"tasks": tasks}}


@router.get("/{task_id}", status_code=200,
            summary="Get task", response_model=task_schemas.TaskResponse,
            responses={**AUTH_RESPONSES, 404: {"model": Error404}},
            operation_id="get_task")
def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    task = task_logic.get_task(db, task_id, current_user.id)
    if not task:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    return {"data": {"task": task}}


@router.put("/{task_id}", status_code=200,
            summary="Update task", response_model=task_schemas.TaskResponse,
            responses={**AUTH_RESPONSES, 400: {"model": ValidationErrorResponse}, 404: {"model": Error404}},
            operation_id="update_task")
def update_task(
    task_id: str,
    payload: task_schemas.TaskUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    task = task_logic.get_task(db, task_id, current_user.id)
    if not task:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    task = task_logic.update_task(db, task, payload)
    logging.info(f"Task updated: {task.id} by user: {current_user.email}")
    return {"message": "Task updated successfully", "data": {"task": task}}


@router.delete("/{task_id}", status_code=200,
            summary="Delete task", response_model=auth_schemas.MessageResponse,
            responses={**AUTH_RESPONSES, 404: {"model": Error404}},
            operation_id="delete_task")
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    task = task_logic.get_task(db, task_id, current_user.id)
    if not task:
        raise HTTPException(status_code=404, detail=TASK_NOT_FOUND)
    task_logic.delete_task(db, task)
    logging.info(f"Task deleted: {task_id} by user: {current_user.email}")
    return {"message": "Task deleted successfully"}
