import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "concursos-test-suite-signing-key-0001"

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.auth import create_access_token  # noqa: E402
from app.core.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.company import Company  # noqa: E402
from app.models.contest import Contest, ContestStatus, ContestType  # noqa: E402
from app.models.contest_role import ContestRole, ContestUserRole  # noqa: E402
from app.models.user import User  # noqa: E402

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False)

ADMIN = "admin-1"


@pytest.fixture
def db() -> Session:
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(subject: str) -> dict:
    token = create_access_token(subject, nombre=subject.title(), email=f"{subject}@example.com")
    return {"Authorization": f"Bearer {token}"}


def add_user(db: Session, subject: str) -> User:
    user = User(id=subject, nombre=subject.title(), email=f"{subject}@example.com")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def make_contest(db: Session):
    """Factory for a contest administered by ADMIN, open for registration by default."""

    def _make(**overrides) -> Contest:
        if db.get(User, ADMIN) is None:
            add_user(db, ADMIN)
        company = db.query(Company).filter(Company.slug == "ganaderos-del-sur").first()
        if company is None:
            company = Company(nombre="Ganaderos del Sur", slug="ganaderos-del-sur")
            db.add(company)
            db.flush()

        now = datetime.now(timezone.utc)
        fields = {
            "company_id": company.id,
            "name": "Feria Ganadera",
            "slug": f"feria-ganadera-{db.query(Contest).count() + 1}",
            "type": ContestType.LIVESTOCK.value,
            "status": ContestStatus.REGISTRATION_OPEN.value,
            "registration_start": now - timedelta(days=1),
            "registration_end": now + timedelta(days=10),
            "contest_start": now + timedelta(days=11),
            "contest_end": now + timedelta(days=12),
        }
        fields.update(overrides)
        contest = Contest(**fields)
        db.add(contest)
        db.flush()
        db.add(ContestUserRole(
            user_id=ADMIN,
            contest_id=contest.id,
            role=ContestRole.CONTEST_ADMINISTRATOR.value,
        ))
        db.commit()
        return contest

    return _make
