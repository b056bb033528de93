"""SQLAlchemy models for finport database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class StatementFormat(Base):
    """Per-bank statement column layout model."""

    __tablename__ = "statement_formats"

    id = Column(Integer, primary_key=True)
    bank_name = Column(String, unique=True, nullable=False)
    date_column = Column(String, nullable=False)
    description_column = Column(String, nullable=False)
    transaction_id_column = Column(String, nullable=True)
    amount_format_type = Column(String, nullable=False)
    debit_column = Column(String, nullable=True)
    credit_column = Column(String, nullable=True)
    amount_column = Column(String, nullable=True)
    drcr_column = Column(String, nullable=True)
    # Comma-separated, already normalized
    debit_tokens = Column(String, nullable=False, default="")
    credit_tokens = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Employee(Base):
    """Employee model."""

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    pan = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
