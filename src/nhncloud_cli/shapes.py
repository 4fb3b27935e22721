"""Runtime shape introspection for command results.

Classifies an arbitrary result value as a scalar, a record, a list of records,
a keyed map, a list of keyed maps, a generic sequence or an opaque value, and
derives the ordered field descriptors used by every rendering path.

Records are dataclass instances. A field may carry an external name and a
visibility flag through ``external()``::

    @dataclass
    class Volume:
        volume_id: str = external("id")
        size_gb: int = external("sizeGb,omitempty", default=0)
        _raw: dict = external(visible=False, default=None)
"""

import dataclasses
import datetime
import decimal
import enum
from collections.abc import Mapping
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .utils import debug_print

EXTERNAL_NAME = "external_name"
VISIBLE = "visible"

SCALAR_TYPES = (
    str,
    bytes,
    bytearray,
    int,
    float,
    bool,
    decimal.Decimal,
    datetime.datetime,
    datetime.date,
    datetime.time,
    enum.Enum,
)


class ShapeKind(enum.Enum):
    SCALAR = "scalar"
    RECORD = "record"
    RECORD_LIST = "record-list"
    KEYED_MAP = "keyed-map"
    MAP_LIST = "map-list"
    SEQUENCE = "sequence"
    OPAQUE = "opaque"


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """One externally visible field of a record type."""

    name: str
    display_name: str

    def value_of(self, record):
        return getattr(record, self.name)


class Shape(NamedTuple):
    kind: ShapeKind
    fields: Tuple[FieldDescriptor, ...] = ()
    keys: Tuple[Any, ...] = ()


def external(name: Optional[str] = None, *, visible: bool = True, **kwargs):
    """Declare a dataclass field with an external name and visibility.

    Args:
        name: External name, optionally followed by comma separated format
            suffixes (``"name,omitempty"``); only the part before the first
            comma is used
        visible: False to exclude the field from every rendered representation
        **kwargs: Passed through to ``dataclasses.field``
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if name is not None:
        metadata[EXTERNAL_NAME] = name
    metadata[VISIBLE] = visible
    return dataclasses.field(metadata=metadata, **kwargs)


def external_name(name: str, override: Optional[str]) -> str:
    """Resolve the display name of a field from its optional override.

    Examples:
        ("db_instance_id", "dbInstanceId,omitempty") -> "dbInstanceId"
        ("name", None) -> "name"
        ("name", ",omitempty") -> "name"
    """
    if not override:
        return name
    resolved = override.split(",", 1)[0].strip()
    return resolved or name


def is_record(value) -> bool:
    """Return True for dataclass instances."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_scalar(value) -> bool:
    return value is None or isinstance(value, SCALAR_TYPES)


def is_sequence(value) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


class ShapeCache:
    """Cache field descriptors per record type."""

    def __init__(self):
        """Initialize shape cache with an empty descriptor cache."""
        self._cache: Dict[type, Tuple[FieldDescriptor, ...]] = {}

    def get_fields(self, record_type: type) -> Tuple[FieldDescriptor, ...]:
        """Get the visible fields of a record type in declaration order.

        Args:
            record_type: Dataclass type

        Returns:
            Tuple of FieldDescriptor; empty when the type is not a record type
        """
        if record_type not in self._cache:
            self._cache[record_type] = tuple(self._describe(record_type))
            debug_print(
                f"Described {record_type.__name__} with "
                f"{len(self._cache[record_type])} visible fields"
            )
        return self._cache[record_type]

    def _describe(self, record_type: type) -> List[FieldDescriptor]:
        if dataclasses.is_dataclass(record_type):
            descriptors = []
            for field in dataclasses.fields(record_type):
                # Private attributes are internal state, never output
                if field.name.startswith("_"):
                    continue
                if not field.metadata.get(VISIBLE, True):
                    continue
                display_name = external_name(field.name, field.metadata.get(EXTERNAL_NAME))
                descriptors.append(FieldDescriptor(field.name, display_name))
            return descriptors

        return []


_shape_cache = ShapeCache()


def get_fields(record_or_type) -> Tuple[FieldDescriptor, ...]:
    """Get field descriptors for a record instance or record type."""
    record_type = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
    return _shape_cache.get_fields(record_type)


def sorted_keys(mapping) -> List[Any]:
    """Keys of a mapping in lexicographic order of their text form."""
    return sorted(mapping.keys(), key=str)


def classify(value) -> Shape:
    """Classify a result value into exactly one ShapeKind.

    A list is a RECORD_LIST when every element is a record of the first
    element's type and a MAP_LIST when every element is a mapping; the header
    of a MAP_LIST comes from the first element's keys. Empty lists are empty
    RECORD_LISTs.
    """
    if is_record(value):
        shape = Shape(ShapeKind.RECORD, fields=get_fields(value))
    elif isinstance(value, Mapping):
        shape = Shape(ShapeKind.KEYED_MAP, keys=tuple(sorted_keys(value)))
    elif is_sequence(value):
        shape = _classify_sequence(list(value))
    elif is_scalar(value):
        shape = Shape(ShapeKind.SCALAR)
    else:
        shape = Shape(ShapeKind.OPAQUE)

    debug_print(f"Classified {type(value).__name__} as {shape.kind.value}")  # pragma: no mutate
    return shape


def _classify_sequence(items: List[Any]) -> Shape:
    if not items:
        return Shape(ShapeKind.RECORD_LIST)

    first = items[0]
    if is_record(first) and all(type(item) is type(first) for item in items):
        return Shape(ShapeKind.RECORD_LIST, fields=get_fields(first))

    if isinstance(first, Mapping) and all(isinstance(item, Mapping) for item in items):
        return Shape(ShapeKind.MAP_LIST, keys=tuple(sorted_keys(first)))

    return Shape(ShapeKind.SEQUENCE)


def record_to_dict(record) -> Dict[str, Any]:
    """Decompose a record into a dict keyed by display name, in declaration order.

    Nested values are left untouched; the JSON encoder recurses into them.
    """
    return {field.display_name: field.value_of(record) for field in get_fields(record)}


def record_from_mapping(record_type: type, mapping: Mapping):
    """Build a record from a mapping keyed by display names or attribute names.

    Unknown keys are ignored and missing keys fall back to the field defaults.

    Raises:
        TypeError: If the mapping lacks a field that has no default
    """
    kwargs = {}
    for field in get_fields(record_type):
        if field.display_name in mapping:
            kwargs[field.name] = mapping[field.display_name]
        elif field.name in mapping:
            kwargs[field.name] = mapping[field.name]
    return record_type(**kwargs)
