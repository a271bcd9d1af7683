from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from app.models.task import Task
from app.task_module import schemas as task_schemas

def list_tasks(db: Session, user_id: str, status: Optional[str] = None, priority: Optional[str] = None) -> List[Task]:
    query = db.query(Task).filter(Task.user_id == user_id)
    if status:
        query = query.filter(Task.status == status)
    if priority:
        query = query.filter(Task.priority == priority)
    return query.order_by(Task.created_at.desc()).all()

def list_all_tasks(db: Session) -> List[Task]:
    return db.query(Task).options(joinedload(Task.user)).order_by(Task.created_at.desc()).all()

def get_task(db: Session, task_id: str, user_id: str) -> Optional[Task]:
    return db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()

def create_task(db: Session, user_id: str, payload: task_schemas.TaskCreate) -> Task:
    # New tasks always start as pending, whatever the client sent.
    task = Task(
        title=payload.title,
        description=payload.description,
        status=task_schemas.TaskStatus.pending.value,
        priority=(payload.priority or task_schemas.TaskPriority.medium).value,
        user_id=user_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task

def update_task(db: Session, task: Task, payload: task_schemas.TaskUpdate) -> Task:
    for field, value in payload.model_dump(mode="json", exclude_unset=True, exclude_none=True).items():
        setattr(task, field, value)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task

def delete_task(db: Session, task: Task) -> None:
    db.delete(task)
    db.commit()
