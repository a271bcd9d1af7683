import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from passlib.context import CryptContext
from app.models.user import User, ROLE_USER
from app.errors import DuplicateEmailError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)

def normalize_email(email: str) -> str:
    return email.strip().lower()

def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()

def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)

def create_user(db: Session, name: str, email: str, password: str, role: str = ROLE_USER) -> User:
    user = User(name=name, email=normalize_email(email), password=get_password_hash(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # unique email lost a race with a concurrent insert
        db.rollback()
        raise DuplicateEmailError(normalize_email(email))
    db.refresh(user)
    return user

def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = get_by_email(db, email)
    if not user or not verify_password(password, user.password):
        logging.warning(f"Login: failed attempt for {normalize_email(email)}")
        return None
    return user
