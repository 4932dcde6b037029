"""
Small formatting helpers shared by the profiler and the cleaning rules.
"""
import json
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Dict, List, Mapping

BYTE_UNITS = ["Bytes", "KB", "MB", "GB"]


def round_half_up(value: float, places: int = 2) -> float:
    """Round to a fixed number of decimal places, halves away from zero."""
    number = Decimal(repr(float(value)))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the requested places
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        return float(number.quantize(quantum, rounding=ROUND_HALF_UP))


def _trim_number(value: float) -> str:
    """Format with at most two decimals and no trailing zeros: 1.50 -> '1.5'."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def format_bytes(size: int) -> str:
    """
    Format a byte count with base-1024 units.

    Examples:
        0 -> '0 Bytes', 1536 -> '1.5 KB', 1048576 -> '1 MB'
    """
    if size <= 0:
        return "0 Bytes"

    index = min(int(math.floor(math.log(size, 1024))), len(BYTE_UNITS) - 1)
    # log() can land a hair under an exact power of 1024
    if index + 1 < len(BYTE_UNITS) and size >= 1024 ** (index + 1):
        index += 1

    scaled = round_half_up(size / (1024 ** index), 2)
    return f"{_trim_number(scaled)} {BYTE_UNITS[index]}"


def canonical_row(row: Mapping[str, Any]) -> str:
    """
    Deterministic text encoding of a row used for equality comparison.

    Keys are sorted, so two rows holding the same cells compare equal
    regardless of key order.
    """
    return json.dumps(row, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def payload_size(records: List[Dict[str, Any]]) -> int:
    """Size in UTF-8 bytes of the compact JSON form of the records."""
    text = json.dumps(records, separators=(",", ":"), ensure_ascii=False, default=str)
    return len(text.encode("utf-8"))
