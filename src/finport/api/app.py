"""HTTP endpoints for statement and salary sheet parsing."""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.orm import Session, sessionmaker

from finport.database.base import Database
from finport.database.factories import create_sqlite_database, sqlite_database_url
from finport.database.models import create_session_factory
from finport.domain.errors import ValidationError
from finport.domain.import_result import FailureKind, ImportFailure, to_payload
from finport.domain.salary_import import SalaryImportService
from finport.domain.statement_format import format_from_fields
from finport.domain.statement_import import StatementImportService

COLUMN_FIELDS = ("date_col", "desc_col", "amount_format_type")


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    """Create the engine and session factory once per process."""
    url = sqlite_database_url()
    logger.info("Opening database {}", url)
    return create_session_factory(url)


def get_db() -> Iterator[Database]:
    """Open a session on the shared engine for one request."""
    db = create_sqlite_database(session_factory=get_session_factory())
    db.connect()
    try:
        yield db
    finally:
        db.disconnect()


def _respond(outcome) -> JSONResponse:
    status_code, payload = to_payload(outcome)
    return JSONResponse(status_code=status_code, content=payload)


def _missing_file() -> JSONResponse:
    return _respond(
        ImportFailure(kind=FailureKind.VALIDATION, message="The file field is required")
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if get_session_factory.cache_info().currsize:
        get_session_factory().kw["bind"].dispose()
        get_session_factory.cache_clear()


app = FastAPI(title="finport", version="0.1.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=422, content={"message": message})


@app.get("/health")
def health() -> dict:
    return {"ok": True, "service": "finport"}


@app.post("/api/statements/parse")
def parse_statement(
    file: Optional[UploadFile] = File(None),
    bank_name: Optional[str] = Form(None),
    date_col: Optional[str] = Form(None),
    desc_col: Optional[str] = Form(None),
    amount_format_type: Optional[str] = Form(None),
    trans_id_col: Optional[str] = Form(None),
    debit_col: Optional[str] = Form(None),
    credit_col: Optional[str] = Form(None),
    amount_col: Optional[str] = Form(None),
    drcr_col: Optional[str] = Form(None),
    debit_texts: Optional[str] = Form(None),
    credit_texts: Optional[str] = Form(None),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """Parse a bank statement into draft transactions.

    When only ``bank_name`` is sent, the bank's saved format is used.
    """
    if file is None:
        return _missing_file()

    fields = {
        "bank_name": bank_name,
        "date_col": date_col,
        "desc_col": desc_col,
        "amount_format_type": amount_format_type,
        "trans_id_col": trans_id_col,
        "debit_col": debit_col,
        "credit_col": credit_col,
        "amount_col": amount_col,
        "drcr_col": drcr_col,
        "debit_texts": debit_texts,
        "credit_texts": credit_texts,
    }
    service = StatementImportService(db)

    if bank_name and not any((fields[name] or "").strip() for name in COLUMN_FIELDS):
        return _respond(service.parse_with_bank(file.file, bank_name, filename=file.filename))

    try:
        fmt = format_from_fields(fields)
    except ValidationError as e:
        return _respond(ImportFailure(kind=FailureKind.VALIDATION, message=str(e)))

    return _respond(service.parse(file.file, fmt, filename=file.filename))


@app.post("/api/salaries/parse")
def parse_salaries(
    file: Optional[UploadFile] = File(None),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """Parse a salary sheet into draft salary entries."""
    if file is None:
        return _missing_file()
    service = SalaryImportService(db)
    return _respond(service.parse(file.file, filename=file.filename))
