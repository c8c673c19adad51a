import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
import os
from datetime import timedelta
from typing import Generator, Any, Callable

# Переменные окружения для тестов выставляются ДО импорта settings и приложения.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "testsecretkey"
os.environ["FIRST_SUPERUSER_USERNAME"] = "testadmin"
os.environ["FIRST_SUPERUSER_EMAIL"] = "testadmin@example.com"
os.environ["FIRST_SUPERUSER_PASSWORD"] = "testpassword"

# Регистрирует все модели в Base.metadata
import app.models

from app.models.base import Base
from app.core.settings import settings as app_settings
from app.main import app

engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

from app.dependencies import get_db
from app.crud.user import create_user
from app.crud.project import create_project, add_member
from app.core import security


@pytest.fixture(scope="function", autouse=True)
def create_test_tables():
    """
    Чистая схема на каждый тест. Откат внешней транзакции здесь не подходит:
    CRUD сам делает rollback после IntegrityError и стёр бы данные фикстур.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Сессия для подготовки данных и проверок в тестах.
    """
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    TestClient; каждый запрос получает свою сессию, как в проде.
    """
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    del app.dependency_overrides[get_db]


def _token_headers(user) -> dict[str, str]:
    token, _ = security.create_access_token(
        data={"sub": user.username, "user_id": user.id},
        expires_delta=timedelta(minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def make_user(db: Session) -> Callable[..., Any]:
    """
    Фабрика пользователей: make_user("alice") -> User.
    """
    def _make_user(username: str, **extra):
        data = {
            "username": username,
            "email": f"{username}@example.com",
            "password": "testpassword",
            "full_name": username.title(),
        }
        data.update(extra)
        return create_user(db=db, data=data)
    return _make_user


@pytest.fixture(scope="function")
def test_user(make_user) -> Any:
    return make_user("testuser", full_name="Test Normal User")


@pytest.fixture(scope="function")
def other_user(make_user) -> Any:
    return make_user("otheruser", full_name="Other User")


@pytest.fixture(scope="function")
def test_superuser(make_user) -> Any:
    return make_user(
        app_settings.FIRST_SUPERUSER_USERNAME,
        email=app_settings.FIRST_SUPERUSER_EMAIL,
        password=app_settings.FIRST_SUPERUSER_PASSWORD,
        full_name="Test Super User",
        is_superuser=True,
    )


@pytest.fixture(scope="function")
def normal_user_token_headers(test_user: Any) -> dict[str, str]:
    return _token_headers(test_user)


@pytest.fixture(scope="function")
def other_user_token_headers(other_user: Any) -> dict[str, str]:
    return _token_headers(other_user)


@pytest.fixture(scope="function")
def token_headers_for() -> Callable[[Any], dict[str, str]]:
    return _token_headers


@pytest.fixture(scope="function")
def project(db: Session, test_user: Any) -> Any:
    """
    Приватный проект test_user.
    """
    return create_project(db, {"name": "Private Project"}, owner_id=test_user.id)


@pytest.fixture(scope="function")
def public_project(db: Session, test_user: Any) -> Any:
    return create_project(db, {"name": "Public Project", "is_public": True}, owner_id=test_user.id)


@pytest.fixture(scope="function")
def add_project_member(db: Session) -> Callable[..., Any]:
    def _add(project, user, role: str = "MEMBER"):
        return add_member(db, project, user.id, role)
    return _add
