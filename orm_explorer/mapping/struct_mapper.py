# ==============================================
# StructMapper
# ==============================================
#
# PURPOSE:
#   Copy same-named, type-compatible fields from a source record
#   into a destination record, without a hand-written converter
#   per pair of record types.
#
# WHY THIS CLASS EXISTS:
#   Models loaded from the database (User, ProductPart, ...) and
#   the plain records the rest of the program works with share
#   many field names but are declared independently. The mapper
#   moves values across by name and leaves everything else alone.
#
# ALGORITHM:
# ----------
#   One pass over the source fields (declaration order). For each:
#     1. look the name up on the destination
#     2. check it is settable
#     3. check the value fits the declared type
#     4. assign
#   The whole plan is built before anything is written, so STRICT
#   mode can refuse the call without touching the destination.
#
# CLASS: StructMapper
# -------------------
#   - __init__(policy: MismatchPolicy = SKIP)
#   - map(destination, source) -> MappingReport
#
# FUNCTION:
# ---------
# - map_structs(destination, source, policy=SKIP) -> None
#
# THREAD SAFETY:
# --------------
#   No shared state. Concurrent calls are fine as long as they
#   target different destination records.
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Tuple

from .introspection import describe_field, is_structured_record, record_fields
from .type_compat import is_assignable


class InvalidRecordError(TypeError):
    """Raised when a mapping argument is missing or is not a structured record."""

    def __init__(self, role: str, value: Any):
        if value is None:
            message = f"{role} record is required, got None"
        else:
            message = f"{role} must be a structured record, got {type(value).__name__}"
        super().__init__(message)
        self.role = role
        self.value = value


class MismatchPolicy(Enum):
    """
    What to do with source fields that have no compatible counterpart.

    - SKIP: ignore them silently
    - WARN: ignore them, printing one warning line per field
    - STRICT: refuse the whole mapping with FieldMismatchError
    """
    SKIP = "skip"
    WARN = "warn"
    STRICT = "strict"


class SkipReason(Enum):
    MISSING = "missing"
    NOT_SETTABLE = "not_settable"
    TYPE_MISMATCH = "type_mismatch"


@dataclass(frozen=True)
class SkippedField:
    name: str
    reason: SkipReason


@dataclass
class MappingReport:
    """Outcome of a single StructMapper.map() call."""
    copied: List[str] = field(default_factory=list)
    skipped: List[SkippedField] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every source field found a home on the destination."""
        return not self.skipped


class FieldMismatchError(ValueError):
    """Raised in STRICT mode when at least one source field cannot be copied."""

    def __init__(self, skipped: List[SkippedField]):
        details = ", ".join(f"{s.name} ({s.reason.value})" for s in skipped)
        super().__init__(f"Cannot map {len(skipped)} field(s): {details}")
        self.skipped = skipped


class StructMapper:
    """
    Copies fields by name between two independently declared records.
    """

    def __init__(self, policy: MismatchPolicy = MismatchPolicy.SKIP):
        self.policy = MismatchPolicy(policy)

    def map(self, destination: Any, source: Any) -> MappingReport:
        """
        Copy every compatible source field onto the destination.

        Args:
            destination: Record to mutate in place
            source: Record to read from (left untouched)

        Returns:
            MappingReport listing copied and skipped field names

        Raises:
            InvalidRecordError: If either argument is None or not a record
            FieldMismatchError: In STRICT mode, if any field would be skipped
        """
        if not is_structured_record(destination):
            raise InvalidRecordError("destination", destination)
        if not is_structured_record(source):
            raise InvalidRecordError("source", source)

        report = MappingReport()
        plan: List[Tuple[str, Any]] = []

        for name in record_fields(source):
            value = getattr(source, name)
            target = describe_field(destination, name)
            if target is None:
                report.skipped.append(SkippedField(name, SkipReason.MISSING))
            elif not target.settable:
                report.skipped.append(SkippedField(name, SkipReason.NOT_SETTABLE))
            elif not is_assignable(value, target.annotation):
                report.skipped.append(SkippedField(name, SkipReason.TYPE_MISMATCH))
            else:
                plan.append((name, value))

        if report.skipped and self.policy is MismatchPolicy.STRICT:
            raise FieldMismatchError(report.skipped)

        for name, value in plan:
            try:
                setattr(destination, name, value)
            except AttributeError:
                # __setattr__ refused the write (e.g. a hand-rolled read-only record)
                report.skipped.append(SkippedField(name, SkipReason.NOT_SETTABLE))
                continue
            report.copied.append(name)

        if report.skipped and self.policy is MismatchPolicy.STRICT:
            raise FieldMismatchError(report.skipped)

        if self.policy is MismatchPolicy.WARN:
            for skipped in report.skipped:
                print(f"⚠ {type(source).__name__}.{skipped.name} not mapped onto "
                      f"{type(destination).__name__} ({skipped.reason.value})")

        return report


def map_structs(destination: Any, source: Any, policy: MismatchPolicy = MismatchPolicy.SKIP) -> None:
    """Copy same-named, type-compatible fields from source into destination."""
    StructMapper(policy).map(destination, source)
