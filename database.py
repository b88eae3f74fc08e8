# database.py
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from config import DATABASE_URL, ENVIRONMENT
from paths import DATA_DIR

logger = logging.getLogger(__name__)

# Make sure the Data directory exists
DATA_DIR.mkdir(exist_ok=True)


def engine_options(url: str) -> dict:
    """Connection options needed by the given database URL."""
    if not url.startswith("sqlite"):
        return {}
    options = {"connect_args": {"check_same_thread": False}}
    # In-memory SQLite lives only as long as its connection
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return options


engine = create_engine(DATABASE_URL, **engine_options(DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    from Models import Base
    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Database initialized (%s) at: %s", ENVIRONMENT, target.url.render_as_string(hide_password=True))


# FastAPI dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
