"""
Reference resolution for client records

A reference field in an API payload arrives either as a bare id or as an
expanded sub-object. It is resolved once, when the payload is parsed, into
one of two tagged values:

    Id(42)                  - only the id is known
    Expanded(PersonRecord)  - the full sub-object is available

Views only ever call ``reference_id`` / ``expanded_value``.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Id:
    value: int


@dataclass(frozen=True)
class Expanded(Generic[T]):
    value: T

    @property
    def id(self) -> int:
        return self.value.id


Reference = Union[Id, Expanded]


def parse_reference(raw: Any, parse_expanded: Callable[[dict], T]) -> Optional[Reference]:
    """Resolve a raw payload field into a Reference (None when absent)"""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, dict):
        return Expanded(parse_expanded(raw))
    if isinstance(raw, int):
        return Id(raw)
    if isinstance(raw, str) and raw.strip().isdigit():
        return Id(int(raw))
    raise ValueError(f"Unrecognised reference value: {raw!r}")


def reference_id(ref: Optional[Reference]) -> Optional[int]:
    if ref is None:
        return None
    if isinstance(ref, Expanded):
        return ref.id
    return ref.value


def expanded_value(ref: Optional[Reference]) -> Optional[Any]:
    """The sub-object when the reference was expanded, else None"""
    if isinstance(ref, Expanded):
        return ref.value
    return None
