from typing import List
from sqlalchemy.orm import Session
from app.models.user import User

def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc()).all()

def update_role(db: Session, user: User, role: str) -> User:
    user.role = role
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def delete_user(db: Session, user: User) -> None:
    db.delete(user)
    db.commit()
