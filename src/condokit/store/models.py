"""SQLAlchemy models for the local record store."""

from datetime import datetime, UTC
from sqlalchemy import Column, Integer, String, DateTime, JSON, Index, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Record(Base):
    """Imported record model."""

    __tablename__ = "records"

    id = Column(Integer, primary_key=True)
    collection = Column(String, nullable=False)
    title = Column(String, nullable=False, default="")
    properties = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_records_collection", "collection"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
