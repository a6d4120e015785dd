"""Argument validation — explicit coercion of a raw argument bag to declared types.

Coercion rules:
- string:  str kept, int/float rendered with str().
- number:  int/float → float, numeric strings parsed with float().
- integer: int kept, float truncated toward zero, strings parsed with int()
           and then float() + truncation.
- boolean: bool kept, 0/1 and "true"/"false"/"1"/"0"/"yes"/"no".
bool is never accepted as a number, and NaN/infinity are rejected.
"""
import logging
import math
from typing import Any, Dict, Iterable, Mapping

from .errors import (
    InvalidEnumError,
    MissingParameterError,
    OutOfRangeError,
    TypeMismatchError,
)
from .registry import ToolParam

logger = logging.getLogger(__name__)

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def _to_string(param: ToolParam, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise TypeMismatchError(param.name, "string", value)


def _to_number(param: ToolParam, value: Any) -> float:
    if isinstance(value, bool):
        raise TypeMismatchError(param.name, "number", value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise TypeMismatchError(param.name, "number", value) from None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise TypeMismatchError(param.name, "number", value) from None
    else:
        raise TypeMismatchError(param.name, "number", value)
    if not math.isfinite(number):
        raise TypeMismatchError(param.name, "number", value)
    return number


def _to_integer(param: ToolParam, value: Any) -> int:
    if isinstance(value, bool):
        raise TypeMismatchError(param.name, "integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
    try:
        number = _to_number(param, value)
    except TypeMismatchError:
        raise TypeMismatchError(param.name, "integer", value) from None
    return int(number)


def _to_boolean(param: ToolParam, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise TypeMismatchError(param.name, "boolean", value)


_COERCERS = {
    "string": _to_string,
    "number": _to_number,
    "integer": _to_integer,
    "boolean": _to_boolean,
}


def coerce_value(param: ToolParam, value: Any) -> Any:
    """Coerce one present value and check enum membership and bounds."""
    coerced = _COERCERS[param.type](param, value)
    if param.lowercase and isinstance(coerced, str):
        coerced = coerced.lower()

    if param.enum is not None and coerced not in param.enum:
        raise InvalidEnumError(param.name, value, param.enum)

    if param.type in ("number", "integer"):
        too_low = param.minimum is not None and coerced < param.minimum
        too_high = param.maximum is not None and coerced > param.maximum
        if too_low or too_high:
            raise OutOfRangeError(param.name, coerced, param.minimum, param.maximum)

    return coerced


def validate_args(params: Iterable[ToolParam], args: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the validated argument bag for a tool call.

    Absent means a missing key or a JSON null. Optional parameters without a
    default are left out so the executor's own keyword default applies.
    """
    args = dict(args or {})
    validated: Dict[str, Any] = {}
    declared = set()

    for param in params:
        declared.add(param.name)
        value = args.get(param.name)
        if value is None:
            if param.required:
                raise MissingParameterError(param.name)
            if param.default is not None:
                validated[param.name] = coerce_value(param, param.default)
            continue
        validated[param.name] = coerce_value(param, value)

    extra = set(args) - declared
    if extra:
        logger.debug(f"Ignoring undeclared arguments: {sorted(extra)}")
    return validated
