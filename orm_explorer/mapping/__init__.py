# ==============================================
# TOPIC 1: STRUCTURE MAPPING
# ==============================================
#
# This package copies fields by name between two
# independently declared records using runtime introspection.
#
# Modules:
# --------
# - introspection.py  → What fields does a record expose? Which are settable?
# - type_compat.py    → Does a value fit a declared annotation?
# - struct_mapper.py  → StructMapper / map_structs
#
# ==============================================

from .introspection import FieldInfo, describe_field, is_structured_record, record_fields
from .type_compat import is_assignable
from .struct_mapper import (
    FieldMismatchError,
    InvalidRecordError,
    MappingReport,
    MismatchPolicy,
    SkippedField,
    SkipReason,
    StructMapper,
    map_structs,
)

__all__ = [
    "FieldInfo",
    "describe_field",
    "is_structured_record",
    "record_fields",
    "is_assignable",
    "FieldMismatchError",
    "InvalidRecordError",
    "MappingReport",
    "MismatchPolicy",
    "SkippedField",
    "SkipReason",
    "StructMapper",
    "map_structs",
]
