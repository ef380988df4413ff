"""Line codec for persisted transactions."""

from expense_tracker.codec.record_codec import (
    decode_record,
    encode_record,
    escape_field,
    format_amount,
    parse_amount,
    parse_date,
    parse_kind,
    split_fields,
    to_cents,
)

__all__ = [
    "decode_record",
    "encode_record",
    "escape_field",
    "format_amount",
    "parse_amount",
    "parse_date",
    "parse_kind",
    "split_fields",
    "to_cents",
]
