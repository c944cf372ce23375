import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")

from reviewhub.database import Base, get_db, enable_sqlite_foreign_keys
from reviewhub.main import app
from reviewhub.services.ai_orchestrator import AIOrchestrator
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

VALID_REPORT_JSON = (
    '{"ranking": 8, "improvements": ["Share updates earlier"], '
    '"qualities": ["Reliable", "Clear communicator"], '
    '"summary": "Consistently strong month."}'
)


@pytest.fixture(scope="function")
def db_session():
    """
    Fresh schema per test. Services commit and roll back on their own, so the
    session is not wrapped in an outer transaction.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def admin_user(db_session):
    """Create the organization admin used by most tests."""
    from reviewhub.models.user import User, UserRole
    from reviewhub.services import auth as auth_service

    user = User(
        email="admin@acme.com",
        hashed_password=auth_service.get_password_hash("AdminPassword123!"),
        role=UserRole.ORG_ADMIN,
        is_active=True,
        full_name="Acme Admin"
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(scope="function")
def org(db_session, admin_user):
    from reviewhub.models.organization import Organization
    org = Organization(name="Acme Corp", email=admin_user.email, owner_user_id=admin_user.id)
    db_session.add(org)
    db_session.commit()
    return org


@pytest.fixture(scope="function")
def department(db_session, org):
    from reviewhub.models.department import Department
    department = Department(organization_id=org.id, name="Engineering")
    db_session.add(department)
    db_session.commit()
    return department


@pytest.fixture(scope="function")
def make_employee(db_session, org):
    """Factory for employees of the default organization, optionally with a login."""
    from reviewhub.models.employee import Employee
    from reviewhub.models.user import User, UserRole
    from reviewhub.services import auth as auth_service

    def _make_employee(name, role="Engineer", department=None, with_login=False, organization=None):
        organization = organization or org
        email = f"{name.lower().replace(' ', '.')}@acme.com"
        employee = Employee(
            organization_id=organization.id,
            name=name,
            role=role,
            email=email,
            department_id=department.id if department else None,
        )
        if with_login:
            user = User(
                email=email,
                hashed_password=auth_service.get_password_hash("EmployeePass123!"),
                role=UserRole.EMPLOYEE,
                full_name=name,
            )
            db_session.add(user)
            db_session.flush()
            employee.user_id = user.id
        db_session.add(employee)
        db_session.commit()
        return employee
    return _make_employee


@pytest.fixture(scope="function")
def assign(db_session):
    from reviewhub.models.review_assignment import ReviewAssignment

    def _assign(reviewer, reviewee):
        db_session.add(ReviewAssignment(reviewer_id=reviewer.id, reviewee_id=reviewee.id))
        db_session.commit()
    return _assign


@pytest.fixture(scope="function")
def add_review(db_session):
    """Insert a review with an explicit timestamp."""
    from reviewhub.models.review import Review

    def _add_review(target, content, created_at, reviewer=None):
        review = Review(
            content=content,
            target_employee_id=target.id,
            reviewer_id=reviewer.id if reviewer else None,
            created_at=created_at,
        )
        db_session.add(review)
        db_session.commit()
        return review
    return _add_review


@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens."""
    from reviewhub.services.auth import create_access_token

    def _get_token(user):
        return create_access_token(data={
            "sub": user.email,
            "role": user.role.value,
            "user_id": user.id,
        })
    return _get_token


@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {get_token(user)}"}
    return _auth_headers


@pytest.fixture(scope="function")
def admin_headers(org, admin_user, auth_headers):
    return auth_headers(admin_user)


@pytest.fixture(scope="function")
def fake_model(monkeypatch):
    """
    Replace the model call. ``fake_model.response`` is returned as the raw text;
    set ``fake_model.error`` to raise instead. Every call's messages are recorded.
    """
    class FakeModel:
        def __init__(self):
            self.response = VALID_REPORT_JSON
            self.error = None
            self.calls = []

        def __call__(self, messages, **kwargs):
            self.calls.append(messages)
            if self.error is not None:
                raise self.error
            return self.response

    fake = FakeModel()
    monkeypatch.setattr(AIOrchestrator, "call_model", fake)
    return fake


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
