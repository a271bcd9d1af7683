import logging
from pydantic import EmailStr, TypeAdapter
from sqlalchemy.orm import Session
from app import models  # noqa: F401
from app.config import settings
from app.database import Base, build_engine, build_session_factory
from app.models.user import User, ROLE_ADMIN
from app.auth_module.logic import create_user, get_by_email, get_password_hash

_email_adapter = TypeAdapter(EmailStr)

def create_or_update_admin(db: Session, email: str, password: str, name: str) -> User:
    # Same rule the login form applies, so the admin can always sign in.
    email = _email_adapter.validate_python(email)
    existing = get_by_email(db, email)
    if not existing:
        user = create_user(db, name=name, email=email, password=password, role=ROLE_ADMIN)
        logging.info(f"Admin user created: {user.email}")
        return user

    if existing.role == ROLE_ADMIN:
        logging.info(f"Admin user already exists: {existing.email}. No changes made.")
        return existing

    existing.role = ROLE_ADMIN
    existing.password = get_password_hash(password)
    db.add(existing)
    db.commit()
    db.refresh(existing)
    logging.info(f"Existing user updated to admin: {existing.email}")
    return existing

def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    engine = build_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    db: Session = build_session_factory(engine)()
    try:
        create_or_update_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_NAME)
    finally:
        db.close()
        engine.dispose()

if __name__ == "__main__":
    main()
