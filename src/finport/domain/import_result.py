"""Import results: the draft batch or the reason the whole call failed."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

from loguru import logger

from finport.domain.entities import DraftSalaryEntry, DraftTransaction, SkippedRow
from finport.domain.errors import DomainError, failed_to_parse

Draft = Union[DraftTransaction, DraftSalaryEntry]


class FailureKind(str, Enum):
    """Why an import call produced no drafts at all."""

    VALIDATION = "validation"
    UNEXPECTED = "unexpected"


STATUS_CODES = {
    FailureKind.VALIDATION: 422,
    FailureKind.UNEXPECTED: 500,
}


@dataclass(frozen=True)
class BatchResult:
    """Drafts in source-row order, plus statement rows the classifier dropped."""

    drafts: list[Draft]
    skipped: list[SkippedRow] = field(default_factory=list)

    @property
    def status_code(self) -> int:
        return 200

    def to_payload(self) -> dict[str, Any]:
        return {"success": True, "data": [draft.to_dict() for draft in self.drafts]}


@dataclass(frozen=True)
class ImportFailure:
    """A configuration, structural or unexpected error that aborted the call."""

    kind: FailureKind
    message: str

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_payload(self) -> dict[str, Any]:
        return {"message": self.message}


ImportOutcome = Union[BatchResult, ImportFailure]


def to_payload(outcome: ImportOutcome) -> tuple[int, dict[str, Any]]:
    """Return the HTTP status code and JSON body for an import outcome."""
    return outcome.status_code, outcome.to_payload()


class BatchBuilder:
    """Accumulates drafts for one import call, numbering them from 1."""

    def __init__(self) -> None:
        self._drafts: list[Draft] = []
        self._skipped: list[SkippedRow] = []

    @property
    def next_id(self) -> int:
        return len(self._drafts) + 1

    def add(self, draft: Draft) -> None:
        self._drafts.append(draft)

    def skip(self, row_index: int, reason: str) -> None:
        logger.debug("Skipping row {}: {}", row_index, reason)
        self._skipped.append(SkippedRow(row_index=row_index, reason=reason))

    def build(self) -> BatchResult:
        return BatchResult(drafts=list(self._drafts), skipped=list(self._skipped))


def run_import(description: str, parse: Callable[[], BatchResult]) -> ImportOutcome:
    """Run a parse step and turn its errors into an ImportFailure.

    Domain errors (missing columns, empty file, unknown format) become
    validation failures; anything else is logged and reported as an
    unexpected failure carrying the exception text.
    """
    try:
        result = parse()
    except DomainError as e:
        logger.info("{} rejected: {}", description, e)
        return ImportFailure(kind=FailureKind.VALIDATION, message=str(e))
    except Exception as e:
        logger.exception("{} failed", description)
        return ImportFailure(kind=FailureKind.UNEXPECTED, message=failed_to_parse(e))

    logger.info(
        "{} parsed {} drafts ({} rows skipped)",
        description,
        len(result.drafts),
        len(result.skipped),
    )
    return result
