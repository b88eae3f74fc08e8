# Models/base.py
from datetime import datetime, timezone
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    # Naive UTC, the form SQLite hands back
    return datetime.now(timezone.utc).replace(tzinfo=None)
