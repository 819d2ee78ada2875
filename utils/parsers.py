import json
from dataclasses import dataclass
from typing import Any, Optional, Tuple

"""
Small dedicated parsers for the list- and JSON-valued spreadsheet fields.

Each parser returns a ParseResult. `values` is always usable (an empty default on
failure); `error` explains the failure and is only read by the validation checks.
"""


@dataclass(frozen=True)
class ParseResult:
    values: Any
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _int_array(raw: Any, label: str) -> ParseResult:
    """Parse a JSON array of integers (or accept an already-parsed list)."""
    if isinstance(raw, (list, tuple)):
        data = list(raw)
    else:
        try:
            data = json.loads(str(raw))
        except (TypeError, ValueError):
            return ParseResult((), f"{label} is not valid JSON: {raw!r}")

    if not isinstance(data, list):
        return ParseResult((), f"{label} must be a JSON array, got: {raw!r}")
    if not all(_is_int(v) for v in data):
        return ParseResult((), f"{label} must contain only integers, got: {raw!r}")
    return ParseResult(tuple(data))


def parse_slots(raw: Any) -> ParseResult:
    """Parse a worker's AvailableSlots, e.g. "[1,3,5]"."""
    if raw is None:
        return ParseResult((), "AvailableSlots is empty")
    return _int_array(raw, "AvailableSlots")


def parse_phases(raw: Any) -> ParseResult:
    """
    Parse a task's PreferredPhases.

    Accepts an inclusive range "a-b" or a JSON integer array. A blank value is an
    empty (but valid) preference; a reversed range yields no phases.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return ParseResult(())
    if isinstance(raw, str) and "-" in raw:
        parts = raw.split("-")
        if len(parts) != 2:
            return ParseResult((), f"PreferredPhases range must look like 'a-b', got: {raw!r}")
        try:
            start, end = (int(p.strip()) for p in parts)
        except ValueError:
            return ParseResult((), f"PreferredPhases range must use integers, got: {raw!r}")
        return ParseResult(tuple(range(start, end + 1)))
    return _int_array(raw, "PreferredPhases")


def parse_attributes(raw: Any) -> ParseResult:
    """Parse a client's AttributesJSON into a dict. Blank values parse to {}."""
    if isinstance(raw, dict):
        return ParseResult(dict(raw))
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return ParseResult({})
    try:
        data = json.loads(str(raw))
    except (TypeError, ValueError):
        return ParseResult({}, f"Invalid JSON in AttributesJSON: {raw!r}")
    if not isinstance(data, dict):
        return ParseResult({}, f"AttributesJSON must be a JSON object, got: {raw!r}")
    return ParseResult(data)


def split_tags(raw: Any) -> Tuple[str, ...]:
    """Split a comma-separated list, trimming tokens and dropping empty ones."""
    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        tokens = [str(t) for t in raw]
    else:
        tokens = str(raw).split(",")
    return tuple(t.strip() for t in tokens if t.strip())


def to_int(raw: Any) -> Optional[int]:
    """Lenient integer coercion: 3, 3.0, "3" and " 3 " give 3; anything else gives None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    return int(value) if value.is_integer() else None


def to_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, float) and raw != raw:  # NaN from pandas
        return ""
    return str(raw).strip()
