"""Record shape definitions for the binary codec.

A shape is the ordered field layout of one record version. Fields carry no
tags on the wire, so two shapes with the same ordered field types would be
indistinguishable once encoded. Shapes therefore expose a layout signature
that is compared whenever a variant table is assembled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from construct import Adapter, Construct, Int8ul, Int32ul, MappingError, PascalString, Struct

from core.constants import STRING_ENCODING
from core.errors import LayoutConflictError
from core.types import Genre


class GenreAdapter(Adapter):
    """Map Genre members to their one-byte declaration index."""

    def _decode(self, obj: int, context: Any, path: str) -> Genre:
        try:
            return Genre(obj)
        except ValueError as error:
            raise MappingError(f"unknown genre index {obj}", path=path) from error

    def _encode(self, obj: Any, context: Any, path: str) -> int:
        if not isinstance(obj, Genre):
            raise MappingError(f"expected Genre, got {type(obj).__name__}", path=path)
        return int(obj)


@dataclass(frozen=True)
class FieldType:
    """Semantic field type bound to its wire construct.

    Attributes:
        label: Stable type name used in layout signatures.
        construct: Wire format for the field value.
    """

    label: str
    construct: Construct


STRING_FIELD = FieldType(label="string", construct=PascalString(Int32ul, STRING_ENCODING))
GENRE_FIELD = FieldType(label="genre", construct=GenreAdapter(Int8ul))


@dataclass(frozen=True)
class RecordShape:
    """Ordered field layout for one record type.

    Attributes:
        name: Human-readable shape name.
        record_type: Dataclass constructed from decoded fields.
        fields: Ordered (field name, field type) pairs.
    """

    name: str
    record_type: type
    fields: tuple[tuple[str, FieldType], ...]
    struct: Construct = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        subcons = [field_name / field_type.construct for field_name, field_type in self.fields]
        object.__setattr__(self, "struct", Struct(*subcons))

    @property
    def field_names(self) -> tuple[str, ...]:
        """Return field names in wire order."""
        return tuple(field_name for field_name, _ in self.fields)

    @property
    def layout_signature(self) -> tuple[str, ...]:
        """Return field type labels in wire order."""
        return tuple(field_type.label for _, field_type in self.fields)

    def to_payload(self, record: object) -> dict[str, object]:
        """Extract wire fields from a record instance."""
        return {field_name: getattr(record, field_name) for field_name in self.field_names}

    def from_payload(self, payload: Mapping[str, Any]) -> Any:
        """Build a record instance from parsed wire fields."""
        return self.record_type(**{name: payload[name] for name in self.field_names})


def ensure_layout_distinct(shapes: Iterable[RecordShape]) -> None:
    """Fail when two shapes share the same ordered field types.

    Args:
        shapes: Shapes that may be confused with each other on the wire.

    Raises:
        LayoutConflictError: If any two shapes have identical signatures.
    """
    seen: dict[tuple[str, ...], str] = {}
    for shape in shapes:
        signature = shape.layout_signature
        if signature in seen:
            raise LayoutConflictError(
                f"Shapes '{seen[signature]}' and '{shape.name}' share layout "
                f"({', '.join(signature)}). Add, remove, or retype a field so "
                "the new variant encodes differently."
            )
        seen[signature] = shape.name
