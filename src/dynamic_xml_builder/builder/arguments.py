"""Classification of the variadic arguments of a node-building call.

Each argument lands in one of three buckets, first match wins:

* a callable taking no argument, or one argument (the builder), is the
  fragment that builds the children of the new element;
* a string or scalar value is the text content;
* anything else is an attribute bag.

A later argument replaces an earlier one in the same bucket.
"""

import dataclasses
import datetime
import decimal
import enum
import functools
import inspect
import math
import numbers
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from dynamic_xml_builder.shared.logging import CorrelationLogger

Fragment = Callable[[], Any]
AttributeFields = List[Tuple[str, Any]]

_SCALAR_TYPES = (
    numbers.Number,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    decimal.Decimal,
    uuid.UUID,
    enum.Enum,
)

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass
class ClassifiedArguments:
    """Result of classifying one call's arguments."""

    content: Optional[str] = None
    attributes: Optional[AttributeFields] = None
    fragment: Optional[Fragment] = None


def is_scalar(value: Any) -> bool:
    """Check whether value is rendered as text content rather than attributes."""
    return isinstance(value, str) or isinstance(value, _SCALAR_TYPES)


def to_xml_string(value: Any) -> str:
    """Convert a scalar to its canonical markup string.

    Booleans become ``true``/``false``, dates and times ISO 8601, enum members
    their name, and non-finite floats ``INF``/``-INF``/``NaN``.
    """
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "INF" if value > 0 else "-INF"
    return str(value)


def callback_arity(callback: Callable[..., Any]) -> Optional[int]:
    """Number of required positional parameters, or None when more than one.

    Callables whose signature cannot be inspected count as taking none.
    """
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return 0

    required = [
        param for param in signature.parameters.values()
        if param.kind in _POSITIONAL_KINDS and param.default is param.empty
    ]
    if len(required) > 1:
        return None
    return len(required)


def attribute_fields(value: Any) -> AttributeFields:
    """Extract ordered (name, value) pairs from an attribute bag.

    Mappings keep insertion order, dataclasses and named tuples keep field
    order, other objects contribute their public instance attributes. A value
    with no fields yields an empty list.
    """
    if isinstance(value, Mapping):
        return [(str(key), item) for key, item in value.items()]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return list(zip(value._fields, value))
    try:
        namespace: Dict[str, Any] = vars(value)
    except TypeError:
        return []
    return [(key, item) for key, item in namespace.items() if not key.startswith("_")]


def classify_arguments(
    args: Sequence[Any],
    builder: Any,
    keyword_attributes: Optional[Dict[str, Any]] = None,
    logger: Optional[CorrelationLogger] = None,
) -> ClassifiedArguments:
    """Partition call arguments into content, attributes and fragment.

    Args:
        args: Positional arguments of the node-building call
        builder: Builder passed to one-argument fragments
        keyword_attributes: Keyword arguments, classified last as one attribute bag
        logger: Logger for arguments that cannot be used as intended

    Returns:
        ClassifiedArguments with each bucket set at most once
    """
    result = ClassifiedArguments()

    for arg in args:
        if arg is None:
            continue

        if callable(arg) and not isinstance(arg, type):
            arity = callback_arity(arg)
            if arity == 0:
                result.fragment = arg
                continue
            if arity == 1:
                result.fragment = functools.partial(arg, builder)
                continue
            if logger is not None:
                logger.warning(
                    "Callable takes more than one argument, using it as an attribute bag",
                    extra={"callable": getattr(arg, "__name__", repr(arg))},
                )

        elif is_scalar(arg):
            result.content = to_xml_string(arg)
            continue

        result.attributes = attribute_fields(arg)

    if keyword_attributes:
        result.attributes = list(keyword_attributes.items())

    return result
