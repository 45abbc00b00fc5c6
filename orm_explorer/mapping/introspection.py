# ==============================================
# Record Introspection
# ==============================================
#
# PURPOSE:
#   Answer three questions about an arbitrary Python object
#   so the StructMapper never has to special-case record kinds:
#     1. Is this a structured record at all?
#     2. Which named fields does it expose, in declaration order?
#     3. For a given name, what is the declared type and can
#        the field be written?
#
# SUPPORTED RECORDS:
# ------------------
#   - dataclass instances       (frozen → nothing settable)
#   - namedtuple instances      (readable, never settable)
#   - __slots__ objects
#   - plain objects with __dict__ (class annotations give types)
#
#   Names starting with "_" are private: never read, never written.
#
# FUNCTIONS:
# ----------
# - is_structured_record(obj) -> bool
# - record_fields(obj) -> list[str]
# - describe_field(obj, name) -> FieldInfo | None
# - class_hints(cls) -> dict[str, Any]
#
# ==============================================

import dataclasses
import inspect
import sys
import types
import typing
from collections.abc import Mapping, Set
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional

# Marker for "no annotation available" (distinct from an explicit None type)
UNDECLARED: Any = object()

_NON_RECORD_TYPES = (
    str, bytes, bytearray, memoryview,
    int, float, complex, bool,
    list, Mapping, Set,
    type, types.ModuleType, types.FunctionType,
    types.BuiltinFunctionType, types.MethodType,
)


@dataclass(frozen=True)
class FieldInfo:
    """Declared shape of one named field on a record."""
    name: str
    annotation: Any = UNDECLARED
    settable: bool = False


def _is_namedtuple(obj: Any) -> bool:
    return isinstance(obj, tuple) and hasattr(type(obj), "_fields")


def _is_public(name: str) -> bool:
    return bool(name) and not name.startswith("_")


def is_structured_record(obj: Any) -> bool:
    """
    Check whether obj is a record with named fields.

    Primitives, collections, classes, modules and functions are not records.
    Named tuples are, plain tuples are not.
    """
    if obj is None:
        return False
    if _is_namedtuple(obj):
        return True
    if isinstance(obj, (tuple, *_NON_RECORD_TYPES)):
        return False
    if dataclasses.is_dataclass(obj):
        return True
    return hasattr(obj, "__dict__") or _declares_slots(type(obj))


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        # Lazily evaluated annotations naming an undefined type
        import annotationlib
        return dict(annotationlib.get_annotations(klass, format=annotationlib.Format.FORWARDREF))


def _resolve_hint(annotation: Any, globalns: Dict[str, Any], localns: Dict[str, Any]) -> Any:
    if isinstance(annotation, typing.ForwardRef):
        annotation = annotation.__forward_arg__
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return UNDECLARED


@lru_cache(maxsize=None)
def class_hints(cls: type) -> Dict[str, Any]:
    """
    Resolved type hints of a class, merged across its MRO.

    When some forward references cannot be resolved, every annotation is
    evaluated on its own against its module and class namespace. Only the
    unresolved ones come back as UNDECLARED.
    """
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        pass

    hints: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        localns.setdefault(klass.__name__, klass)
        for name, annotation in _own_annotations(klass).items():
            hints[name] = _resolve_hint(annotation, globalns, localns)
    return hints


@lru_cache(maxsize=None)
def _slot_names(cls: type) -> tuple:
    names = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot not in ("__dict__", "__weakref__") and slot not in names:
                names.append(slot)
    return tuple(names)


def _declares_slots(cls: type) -> bool:
    # An empty __slots__ still makes a (fieldless) record
    return any("__slots__" in vars(klass) for klass in cls.__mro__ if klass is not object)


def record_fields(obj: Any) -> List[str]:
    """
    Public field names of a record in declaration order.

    For plain objects this is slots first (base classes first),
    then instance attributes in insertion order.
    """
    if dataclasses.is_dataclass(obj):
        # init=False fields may never have been assigned
        names = [f.name for f in dataclasses.fields(obj) if hasattr(obj, f.name)]
    elif _is_namedtuple(obj):
        names = list(type(obj)._fields)
    else:
        names = [name for name in _slot_names(type(obj)) if hasattr(obj, name)]
        instance_dict = getattr(obj, "__dict__", None)
        if instance_dict:
            names.extend(name for name in instance_dict if name not in names)
    return [name for name in names if _is_public(name)]


def _property_annotation(prop: property) -> Any:
    if prop.fget is None:
        return UNDECLARED
    try:
        return typing.get_type_hints(prop.fget, include_extras=True).get("return", UNDECLARED)
    except (NameError, TypeError):
        return UNDECLARED


def describe_field(obj: Any, name: str) -> Optional[FieldInfo]:
    """
    Describe the field `name` on obj, or return None when obj has no such field.
    """
    if not _is_public(name):
        return None

    cls = type(obj)
    hints = class_hints(cls)

    if dataclasses.is_dataclass(obj):
        by_name = {f.name: f for f in dataclasses.fields(obj)}
        if name not in by_name:
            return None
        frozen = cls.__dataclass_params__.frozen
        return FieldInfo(name, hints.get(name, by_name[name].type), settable=not frozen)

    if _is_namedtuple(obj):
        if name not in cls._fields:
            return None
        return FieldInfo(name, hints.get(name, UNDECLARED), settable=False)

    try:
        attribute = inspect.getattr_static(cls, name)
    except AttributeError:
        attribute = None

    if isinstance(attribute, property):
        annotation = hints.get(name, _property_annotation(attribute))
        return FieldInfo(name, annotation, settable=attribute.fset is not None)

    if isinstance(attribute, types.MemberDescriptorType) and name in _slot_names(cls):
        return FieldInfo(name, hints.get(name, UNDECLARED), settable=True)

    instance_dict = getattr(obj, "__dict__", None)
    if instance_dict is not None and (name in instance_dict or name in hints):
        if typing.get_origin(hints.get(name)) is typing.ClassVar:
            return None
        return FieldInfo(name, hints.get(name, UNDECLARED), settable=True)

    return None
