# app/initial_data.py

import asyncio
import logging
from sqlalchemy.orm import Session
import app.models  # noqa: F401  регистрирует все модели в Base.metadata
from app.models.base import Base
from app.database import SessionLocal, engine
from app.crud.user import create_user as crud_create_user, get_user_by_username
from app.crud.project import create_project, get_projects_for_user
from app.core.settings import settings
from app.core.exceptions import UserValidationError, ConflictError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("Taskboard.InitialData")

def create_tables() -> None:
    logger.info("Creating database tables (if missing)...")
    Base.metadata.create_all(bind=engine)

async def create_initial_admin_user(db: Session):
    logger.info("Checking if initial admin user needs to be created...")
    superuser_username = settings.FIRST_SUPERUSER_USERNAME
    superuser_email = settings.FIRST_SUPERUSER_EMAIL
    superuser_password = settings.FIRST_SUPERUSER_PASSWORD
    if not (superuser_username and superuser_email and superuser_password):
        logger.info("FIRST_SUPERUSER_* is not configured. Skipping admin creation.")
        return None

    admin_user = get_user_by_username(db, username=superuser_username)
    if not admin_user:
        logger.info(f"Admin user '{superuser_username}' not found. Creating...")
        user_data = {
            "username": superuser_username,
            "email": superuser_email,
            "password": superuser_password,
            "full_name": "Admin User",
            "is_active": True,
            "is_superuser": True,
        }
        try:
            admin_user = crud_create_user(db=db, data=user_data)
            logger.info(f"Admin user '{superuser_username}' created successfully.")
        except (UserValidationError, ConflictError) as e:
            logger.error(f"Failed to create admin user: {e}")
            return None
    else:
        logger.info(f"Admin user '{superuser_username}' already exists. No action taken.")
    return admin_user

async def create_demo_project(db: Session, owner) -> None:
    if get_projects_for_user(db, owner.id):
        return
    project = create_project(
        db,
        {"name": "Getting Started", "description": "Demo project with default sections."},
        owner_id=owner.id,
    )
    logger.info(f"Demo project {project.id} created for '{owner.username}'.")

async def main() -> None:
    logger.info("Initializing initial data (tables, admin user, demo project)...")
    create_tables()
    db = SessionLocal()
    try:
        admin_user = await create_initial_admin_user(db)
        if admin_user is not None:
            await create_demo_project(db, admin_user)
    finally:
        db.close()
    logger.info("Finished initial data setup.")

if __name__ == "__main__":
    from dotenv import load_dotenv
    load_dotenv()

    asyncio.run(main())
