import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hrdesk.core.security import create_access_token, hash_password
from hrdesk.database.base import Base
from hrdesk.database.session import get_db
from hrdesk.main import app
from hrdesk.models.user import Employee


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_employee(db, code, name, role="employee", **extra):
    employee = Employee(
        employee_code=code,
        name=name,
        email=f"{code.lower()}@example.com",
        password_hash=hash_password("Secret@123"),
        role=role,
        is_active=True,
        **extra,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def admin(db):
    return _make_employee(db, "ADMIN001", "Asha Admin", role="admin")


@pytest.fixture
def employee(db):
    return _make_employee(db, "EMP20250001", "Ravi Kumar", department="Support")


@pytest.fixture
def other_employee(db):
    return _make_employee(db, "EMP20250002", "Meera Shah", department="Sales")


def auth_headers(user):
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def employee_headers(employee):
    return auth_headers(employee)
