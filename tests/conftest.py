import os
import sys
from pathlib import Path
from typing import Callable, Generator

import bcrypt
import pytest
from sqlalchemy.orm import Session, sessionmaker

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Keep the module level engine away from any real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from database import Base, create_database_engine, get_db
from models.database import User
from services.auth import create_access_token, router as auth_router
from services.subtitles.app import app as subtitles_app
from services.subtitles.pipeline import DocumentPipeline
from services.subtitles.repository import DocumentRepository

SERVICE_APPS = [subtitles_app]

SAMPLE_SRT = (
    "1\n00:00:01,000 --> 00:00:02,500\nHello\n\n"
    "2\n00:00:03,000 --> 00:00:04,000\nWorld\n"
)


@pytest.fixture(scope="session")
def session_factory(tmp_path_factory: pytest.TempPathFactory) -> sessionmaker:
    """Create a SQLite session factory for tests."""
    db_dir = tmp_path_factory.mktemp("subtrans-db")
    db_path = db_dir / "test.db"
    engine = create_database_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(bind=engine)

    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    # Seed default test users
    with SessionLocal() as session:
        for username in ("testuser", "otheruser"):
            if not session.query(User).filter(User.username == username).first():
                hashed_password = bcrypt.hashpw(
                    "testpass".encode("utf-8"), bcrypt.gensalt()
                ).decode("utf-8")
                session.add(
                    User(
                        username=username,
                        email=f"{username}@example.com",
                        hashed_password=hashed_password,
                    )
                )
        session.commit()

    return SessionLocal


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_user(db_session: Session) -> User:
    return db_session.query(User).filter(User.username == "testuser").one()


@pytest.fixture
def other_user(db_session: Session) -> User:
    return db_session.query(User).filter(User.username == "otheruser").one()


@pytest.fixture
def pipeline(db_session: Session) -> DocumentPipeline:
    return DocumentPipeline(DocumentRepository(db_session), languages={"en": "English", "ru": "Russian"})


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    def _headers(username: str = "testuser") -> dict[str, str]:
        token = create_access_token({"sub": username})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture(scope="session", autouse=True)
def attach_auth_routes() -> None:
    """Ensure authentication routes are available on service apps for testing."""
    for service_app in SERVICE_APPS:
        if not any(getattr(route, "path", "") == "/token" for route in service_app.routes):
            service_app.include_router(auth_router)


@pytest.fixture(autouse=True)
def test_environment(session_factory: sessionmaker) -> Generator[None, None, None]:
    """Point every service app at the test database."""

    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    for service_app in SERVICE_APPS:
        service_app.dependency_overrides[get_db] = _get_test_db

    try:
        yield
    finally:
        for service_app in SERVICE_APPS:
            service_app.dependency_overrides.pop(get_db, None)
