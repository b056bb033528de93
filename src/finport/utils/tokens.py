"""Debit/credit indicator token matching."""

from typing import Any, Iterable, Optional

from finport.domain.entities import TransactionType

# Shorter tokens only match the whole indicator.
MIN_SUBSTRING_TOKEN_LENGTH = 2


def normalize_tokens(tokens: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalize a token vocabulary.

    Accepts a comma-separated string ("DR, Debit,WDL") or an iterable of
    tokens. Tokens are trimmed and upper-cased; empty entries and repeats
    are dropped, keeping the first occurrence.
    """
    if tokens is None:
        return ()
    parts = tokens.split(",") if isinstance(tokens, str) else tokens

    result: list[str] = []
    for part in parts:
        token = str(part).strip().upper()
        if token and token not in result:
            result.append(token)
    return tuple(result)


def normalize_indicator(value: Any) -> str:
    """Trim and upper-case a dr/cr indicator cell."""
    if value is None:
        return ""
    return str(value).strip().upper()


def matches_token(indicator: str, tokens: Iterable[str]) -> bool:
    """Check whether a normalized indicator matches any token.

    A token matches when it equals the indicator, or when it is at least two
    characters long and occurs anywhere inside the indicator ("NEFT DR ADJ"
    matches "DR").
    """
    for token in tokens:
        if indicator == token:
            return True
        if len(token) >= MIN_SUBSTRING_TOKEN_LENGTH and token in indicator:
            return True
    return False


def classify_indicator(
    indicator: str, debit_tokens: Iterable[str], credit_tokens: Iterable[str]
) -> Optional[TransactionType]:
    """Classify an indicator as expense (debit) or income (credit).

    Debit tokens are checked first.

    Returns:
        TransactionType, or None if neither vocabulary matches
    """
    if matches_token(indicator, debit_tokens):
        return TransactionType.EXPENSE
    if matches_token(indicator, credit_tokens):
        return TransactionType.INCOME
    return None
