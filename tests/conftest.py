"""
Shared fixtures: an in-memory SQLite database per test, the services bound to
one session, and a TestClient whose DB and current-user dependencies are
overridden (the user id comes from the X-User-Id header).
"""

from __future__ import annotations

import os

os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import Iterator
from datetime import date

import pytest
from fastapi import Request
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_current_user_id
from app.database.session import create_tables, get_db, make_session_factory
from app.modules.assignments.service import AssignmentService
from app.modules.calendar.service import CalendarService
from app.modules.tasks.service import TaskService
from app.modules.templates.schemas import TemplateCreate, TemplateResponse, TemplateTaskInput
from app.modules.templates.service import TemplateService

ALICE = "user-alice"
BOB = "user-bob"
DAY = date(2026, 3, 10)


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Iterator[Session]:
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def templates(db: Session) -> TemplateService:
    return TemplateService(db)


@pytest.fixture
def assignments(db: Session) -> AssignmentService:
    return AssignmentService(db)


@pytest.fixture
def tasks(db: Session) -> TaskService:
    return TaskService(db)


@pytest.fixture
def calendar(db: Session) -> CalendarService:
    return CalendarService(db)


@pytest.fixture
def make_template(templates: TemplateService):
    """Create a template for a user from plain task titles."""

    def _make(name: str = "Infusion Day", titles: list[str] | None = None, user_id: str = ALICE,
              color: str = "#E57373") -> TemplateResponse:
        titles = ["Hydrate", "Pre-meds", "Pack bag"] if titles is None else titles
        return templates.create_template(
            TemplateCreate(name=name, color=color, tasks=[TemplateTaskInput(title=t) for t in titles]),
            user_id,
        )

    return _make


def count_rows(db: Session, model, **filters) -> int:
    """Count rows in its own transaction so the services can keep using the session."""
    with db.begin():
        stmt = select(func.count()).select_from(model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        return db.execute(stmt).scalar_one()


@pytest.fixture
def client(engine: Engine) -> Iterator[TestClient]:
    from app.main import app

    session_factory = make_session_factory(engine)

    def override_get_db() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def override_user_id(request: Request) -> str:
        return request.headers.get("X-User-Id", ALICE)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_id] = override_user_id
    yield TestClient(app)
    app.dependency_overrides.clear()
