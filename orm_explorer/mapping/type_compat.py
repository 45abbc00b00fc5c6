# ==============================================
# Type Compatibility
# ==============================================
#
# PURPOSE:
#   Decide whether a runtime value may be assigned to a field
#   declared with a given annotation.
#
# RULES:
# ------
#   1. No annotation / Any / object / TypeVar → accepted
#   2. Optional[X], X | None, Union[...]       → any member accepts
#   3. Literal[...]                            → value is one of the literals
#   4. Annotated[X, ...], NewType              → decided by X
#   5. list[int], dict[str, int], ...          → checked against origin only
#   6. float accepts int (not bool); complex accepts int and float
#   7. everything else                         → isinstance()
#
#   Values are never converted, only checked.
#
# ==============================================

import types
import typing
from typing import Any

from .introspection import UNDECLARED

_ACCEPT_ALL = (Any, object)

_UNION_TYPES = (typing.Union, types.UnionType)


def _is_real_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_assignable(value: Any, annotation: Any) -> bool:
    """
    Check whether value fits a field declared as annotation.

    Args:
        value: Runtime value read from the source record
        annotation: Declared type of the destination field

    Returns:
        True if the assignment is type-compatible
    """
    if annotation is UNDECLARED or annotation in _ACCEPT_ALL:
        return True

    if annotation is None or annotation is type(None):
        return value is None

    # Unresolved forward reference: nothing to check against
    if isinstance(annotation, (str, typing.ForwardRef)):
        return True

    if isinstance(annotation, typing.TypeVar):
        return True

    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return is_assignable(value, supertype)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin in _UNION_TYPES:
        return any(is_assignable(value, arg) for arg in args)

    if origin is typing.Literal:
        return any(value == arg and type(value) is type(arg) for arg in args)

    if origin is typing.Annotated:
        return is_assignable(value, args[0])

    if origin in (typing.ClassVar, typing.Final):
        return bool(args) and is_assignable(value, args[0])

    if origin is not None:
        annotation = origin

    if annotation is float:
        return _is_real_number(value)

    if annotation is complex:
        return _is_real_number(value) or isinstance(value, complex)

    if not isinstance(annotation, type):
        return True

    try:
        return isinstance(value, annotation)
    except TypeError:
        # Non-runtime-checkable protocols and friends
        return True
