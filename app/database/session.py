from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from app.config.settings import settings
from typing import Iterator, Optional
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    _engine: Engine = None
    _session_factory: sessionmaker = None

    @classmethod
    def get_engine(cls) -> Engine:
        if cls._engine is None:
            connect_args = {}
            if settings.database_url.startswith("sqlite"):
                # FastAPI runs sync handlers in a threadpool
                connect_args["check_same_thread"] = False
            cls._engine = create_engine(
                settings.database_url,
                echo=settings.database_echo,
                connect_args=connect_args,
            )
        return cls._engine

    @classmethod
    def get_session_factory(cls) -> sessionmaker:
        if cls._session_factory is None:
            cls._session_factory = make_session_factory(cls.get_engine())
        return cls._session_factory

    @classmethod
    def reset(cls):
        if cls._engine is not None:
            cls._engine.dispose()
        cls._engine = None
        cls._session_factory = None


def make_session_factory(engine: Engine) -> sessionmaker:
    """Sessions keep loaded attributes after commit; services return schemas built in-transaction."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_tables(engine: Optional[Engine] = None) -> None:
    """Create every table registered on Base."""
    # Model modules register themselves on import
    from app.modules.templates import models as _templates  # noqa: F401
    from app.modules.assignments import models as _assignments  # noqa: F401
    from app.modules.tasks import models as _tasks  # noqa: F401

    engine = engine or Database.get_engine()
    Base.metadata.create_all(engine)
    logger.info("Database schema ensured")


def get_db() -> Iterator[Session]:
    session = Database.get_session_factory()()
    try:
        yield session
    finally:
        session.close()
