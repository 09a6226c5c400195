"""Seed script: creates a demo company, an open livestock contest and its administrator."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import app.models  # noqa: F401, E402
from app.core.auth import create_access_token  # noqa: E402
from app.core.database import SessionLocal  # noqa: E402
from app.models.company import Company  # noqa: E402
from app.models.contest import Contest, ContestStatus, ContestType  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.contests import create_contest  # noqa: E402

ADMIN_SUBJECT = "seed|admin"


def seed() -> None:
    db = SessionLocal()
    try:
        admin = db.get(User, ADMIN_SUBJECT)
        if not admin:
            admin = User(id=ADMIN_SUBJECT, nombre="Administrador", email="admin@example.com")
            db.add(admin)
            db.commit()

        company = db.query(Company).filter(Company.slug == "asociacion-holstein").first()
        if not company:
            company = Company(
                nombre="Asociación Holstein",
                slug="asociacion-holstein",
                is_published=True,
            )
            db.add(company)
            db.commit()
            db.refresh(company)

        contest = db.query(Contest).filter(Contest.slug == "exposicion-nacional-holstein").first()
        if contest:
            print(f"Contest already exists: id={contest.id}")
        else:
            now = datetime.now(timezone.utc)
            contest = create_contest(
                db,
                admin.id,
                company_id=company.id,
                name="Exposición Nacional Holstein",
                type=ContestType.LIVESTOCK.value,
                status=ContestStatus.REGISTRATION_OPEN.value,
                registration_start=now - timedelta(days=1),
                registration_end=now + timedelta(days=30),
                contest_start=now + timedelta(days=31),
                contest_end=now + timedelta(days=33),
                max_participants=50,
            )
            print(f"Contest created: id={contest.id}, slug={contest.slug}")

        print(f"Admin token: {create_access_token(admin.id, admin.nombre, admin.email)}")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
