# ecofinds/database/core.py
from typing import Annotated
from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool
import logging

from ..core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

logger.info("Using database: Postgresql" if "postgresql" in DATABASE_URL else "Using database: SQLite")

# Create engine with appropriate settings for PostgreSQL vs SQLite
if DATABASE_URL.startswith("sqlite"):
    sqlite_kwargs = {"connect_args": {"check_same_thread": False}}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        # In-memory databases live and die with their connection; share one
        sqlite_kwargs["poolclass"] = StaticPool
    engine = create_engine(
        DATABASE_URL,
        echo=False,  # Set to True for SQL debugging
        **sqlite_kwargs
    )
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        pool_recycle=300,
        echo=False
    )

# Largest value an Integer column holds on every supported backend
MAX_DB_INT = 2_147_483_647

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


DbSession = Annotated[Session, Depends(get_db)]
