"""Decoding of caller supplied stack inputs.

The payload is a JSON object whose ``operand_stack`` field lists values top of
stack first, e.g. ``{"operand_stack": ["10", "20"]}``. The engine pushes its
inputs in order, so the decoded list is reversed: ``20`` is pushed first and
ends up below ``10``.
"""
from __future__ import annotations

import json
import re
from typing import Any

U64_MAX = (1 << 64) - 1
# Goldilocks prime used by the Miden VM field.
FIELD_MODULUS = (1 << 64) - (1 << 32) + 1
MAX_STACK_INPUTS = 16

_DECIMAL_RE = re.compile(r"\+?[0-9]+")


class InputDecodeError(ValueError):
    """Base class for stack input decoding failures."""


class InvalidJsonError(InputDecodeError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid JSON: {detail}")
        self.detail = detail


class InvalidNumberError(InputDecodeError):
    def __init__(self, value: str, detail: str) -> None:
        super().__init__(f"Invalid number '{value}': {detail}")
        self.value = value
        self.detail = detail


class StackInputsError(InputDecodeError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to create stack inputs: {detail}")
        self.detail = detail


def _parse_u64(text: str) -> int:
    if not text:
        raise InvalidNumberError(text, "cannot parse integer from empty string")
    if not _DECIMAL_RE.fullmatch(text):
        raise InvalidNumberError(text, "invalid digit found in string")
    value = int(text)
    if value > U64_MAX:
        raise InvalidNumberError(text, "number too large to fit in target type")
    return value


def _coerce_number(item: Any) -> int | None:
    if isinstance(item, bool) or not isinstance(item, int):
        return None
    if 0 <= item <= U64_MAX:
        return item
    return None


def _check_stack_inputs(values: list[int]) -> None:
    if len(values) > MAX_STACK_INPUTS:
        raise StackInputsError(
            f"number of stack inputs is {len(values)}, but at most {MAX_STACK_INPUTS} are allowed"
        )
    for value in values:
        if value >= FIELD_MODULUS:
            raise StackInputsError(f"{value} is not a valid field element")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def decode_stack_inputs(raw: str | None) -> list[int]:
    """Decode ``raw`` into engine-ordered stack inputs.

    A missing payload, a payload that is not an object, or an ``operand_stack``
    that is absent or not a list all decode to no inputs. Element errors are
    strict for strings; numbers that do not fit an unsigned 64-bit integer
    are skipped.
    """
    if raw is None:
        return []
    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except RecursionError as exc:
        raise InvalidJsonError("recursion limit exceeded") from exc
    except ValueError as exc:
        raise InvalidJsonError(str(exc)) from exc

    values: list[int] = []
    operand_stack = parsed.get("operand_stack") if isinstance(parsed, dict) else None
    if isinstance(operand_stack, list):
        for item in operand_stack:
            if isinstance(item, str):
                values.append(_parse_u64(item))
                continue
            number = _coerce_number(item)
            if number is not None:
                values.append(number)

    values.reverse()
    _check_stack_inputs(values)
    return values


__all__ = [
    "FIELD_MODULUS",
    "MAX_STACK_INPUTS",
    "InputDecodeError",
    "InvalidJsonError",
    "InvalidNumberError",
    "StackInputsError",
    "decode_stack_inputs",
]
