"""
Record Codec

One transaction <-> one line of delimited text:

    date,category,description,amount,kind

ESCAPING: a backslash escapes the character after it. Inside the two
free-text fields a backslash is written as `\\\\`, the delimiter as `\\,`,
a line feed as `\\n` and a carriage return as `\\r`, so every record stays
on one physical line. Quote characters carry no meaning and pass through.

ROUNDING: amounts are written with exactly two fractional digits using
ROUND_HALF_UP.
"""

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from expense_tracker.exceptions import MalformedRecordError
from expense_tracker.models.transaction import Transaction, TransactionKind


DELIMITER = ","
ESCAPE = "\\"
DATE_FORMAT = "%Y-%m-%d"
FIELD_COUNT = 5
CENTS = Decimal("0.01")

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
_AMOUNT_PATTERN = re.compile(r"-?\d+(\.\d+)?")
# Storage reads with errors="surrogateescape"; bad bytes land in this range
_UNDECODABLE = re.compile("[\udc80-\udcff]")

_ESCAPES = {
    ESCAPE: ESCAPE + ESCAPE,
    DELIMITER: ESCAPE + DELIMITER,
    "\n": ESCAPE + "n",
    "\r": ESCAPE + "r",
}
_UNESCAPES = {
    "n": "\n",
    "r": "\r",
}


def escape_field(value: str) -> str:
    """Escape a free-text field so it survives splitting on the delimiter."""
    if not value:
        return ""
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def split_fields(line: str) -> list[str]:
    """
    Split a line on unescaped delimiters, resolving escapes as we go.

    A lone backslash at the very end of the line is kept as a literal
    backslash.
    """
    fields = []
    current = []
    escaped = False

    for ch in line:
        if escaped:
            current.append(_UNESCAPES.get(ch, ch))
            escaped = False
        elif ch == ESCAPE:
            escaped = True
        elif ch == DELIMITER:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)

    if escaped:
        current.append(ESCAPE)
    fields.append("".join(current))
    return fields


def to_cents(amount: Decimal) -> Decimal:
    """
    Round an amount to cents, half up.

    Raises:
        ValueError: If the amount is not finite or has too many digits
                    to hold two decimals in the current context
    """
    value = Decimal(amount)
    if not value.is_finite():
        raise ValueError(f"Amount is not a finite number: {amount}")
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount cannot be rounded to cents: {amount}")


def format_amount(amount: Decimal) -> str:
    """Render an amount with exactly two decimals, rounding half up. Raises ValueError."""
    return str(to_cents(amount))


def parse_date(text: str) -> date:
    """Parse a strict YYYY-MM-DD date. Raises ValueError."""
    if not _DATE_PATTERN.fullmatch(text):
        raise ValueError(f"Date must be YYYY-MM-DD, got {text!r}")
    return datetime.strptime(text, DATE_FORMAT).date()


def parse_amount(text: str) -> Decimal:
    """Parse a plain decimal amount and round it to cents. Raises ValueError."""
    if not _AMOUNT_PATTERN.fullmatch(text):
        raise ValueError(f"Amount must be a plain decimal number, got {text!r}")
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Amount is not a number: {text!r}")
    return to_cents(value)


def parse_kind(text: str) -> TransactionKind:
    """Parse the canonical kind name. Case-sensitive. Raises ValueError."""
    try:
        return TransactionKind(text)
    except ValueError:
        raise ValueError(f"Kind must be INCOME or EXPENSE, got {text!r}")


def encode_record(transaction: Transaction) -> str:
    """
    Encode a transaction as a single line (without the line terminator).

    Raises:
        MalformedRecordError: If the amount cannot be written with two decimals
    """
    try:
        amount_text = format_amount(transaction.amount)
    except ValueError as e:
        raise MalformedRecordError(str(e)) from e

    return DELIMITER.join([
        transaction.date.isoformat(),
        escape_field(transaction.category),
        escape_field(transaction.description),
        amount_text,
        transaction.kind.value,
    ])


def decode_record(line: str) -> Transaction:
    """
    Decode one line into a transaction.

    Raises:
        MalformedRecordError: undecodable bytes, wrong field count, or any
                              field fails to parse
    """
    raw = line.rstrip("\r\n")
    if _UNDECODABLE.search(raw):
        raise MalformedRecordError("Line contains bytes that are not valid text", line=line)

    fields = split_fields(raw)

    if len(fields) != FIELD_COUNT:
        raise MalformedRecordError(
            f"Expected {FIELD_COUNT} fields, found {len(fields)}",
            line=line,
        )

    date_text, category, description, amount_text, kind_text = fields

    try:
        return Transaction(
            date=parse_date(date_text),
            category=category,
            description=description,
            amount=parse_amount(amount_text),
            kind=parse_kind(kind_text),
        )
    except ValueError as e:
        raise MalformedRecordError(str(e), line=line) from e
