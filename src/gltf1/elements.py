"""
Element parser: type-dispatched conversion of JSON tree values.

A Kind converts one tree value plus a path label (e.g. "glTF.nodes.n1.matrix")
into one target value, or raises a GltfError naming the path. The set of
kinds is closed:

- scalars: BOOLEAN, FLOAT, INTEGER, STRING
- Array(kind): homogeneous list
- Mapping(kind): name-keyed dict of children
- FixedArray(kind, seed): fixed-size tuple over a pre-seeded default
- Entity(cls): delegates to the assembler registered for a model class

ElementParser layers the presence policies (required / optional) and the
allow-list validation (mapped) on top of the kinds.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping as MappingABC
from typing import Any

from .config import ParseConfig
from .errors import ElementTypeError, MissingElementError, UnexpectedValueError
from .jsontree import MISSING, JsonType, child, json_type


class Kind(ABC):
    """Base class for target semantic types."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Used in error messages: "Could not parse element 'x' as <description>." """
        ...

    @abstractmethod
    def convert(self, parser: ElementParser, value: Any, path: str) -> Any:
        """Convert a present value or raise."""
        ...

    def fail(self, path: str) -> ElementTypeError:
        return ElementTypeError(f"Could not parse element '{path}' as {self.description}.", path)


class Scalar(Kind):
    """A leaf value accepted from a fixed set of JSON types."""

    def __init__(self, description: str, accepts: tuple[JsonType, ...], cast: Callable[[Any], Any]):
        self._description = description
        self.accepts = accepts
        self.cast = cast

    @property
    def description(self) -> str:
        return self._description

    def convert(self, parser: ElementParser, value: Any, path: str) -> Any:
        if json_type(value) not in self.accepts:
            raise self.fail(path)
        try:
            return self.cast(value)
        except OverflowError:
            # integer literal beyond float range
            raise self.fail(path) from None


BOOLEAN = Scalar("a boolean", (JsonType.BOOLEAN,), bool)
FLOAT = Scalar("a float", (JsonType.INTEGER, JsonType.REAL), float)
INTEGER = Scalar("an integer", (JsonType.INTEGER,), int)
STRING = Scalar("a string", (JsonType.STRING,), str)


class Array(Kind):
    """A JSON array whose elements all convert with the same kind."""

    def __init__(self, item: Kind):
        self.item = item

    @property
    def description(self) -> str:
        return "an array"

    def convert(self, parser: ElementParser, value: Any, path: str) -> list:
        if json_type(value) is not JsonType.ARRAY:
            raise self.fail(path)
        return [parser.parse(element, f"{path}[{i}]", self.item) for i, element in enumerate(value)]


class Mapping(Kind):
    """A JSON object whose members all convert with the same kind."""

    def __init__(self, item: Kind):
        self.item = item

    @property
    def description(self) -> str:
        return "an object"

    def fail(self, path: str) -> ElementTypeError:
        return ElementTypeError(f"Could not parse children of element '{path}'. It is not an object.", path)

    def convert(self, parser: ElementParser, value: Any, path: str) -> dict:
        if json_type(value) is not JsonType.OBJECT:
            raise self.fail(path)
        return {name: parser.parse(member, f"{path}.{name}", self.item) for name, member in value.items()}


class FixedArray(Kind):
    """
    A fixed-size vector or matrix.

    The seed is the default value and fixes the size N. The first
    min(N, len(input)) positions are taken from the input; extra input
    elements are ignored and unfilled positions keep the seed. A length
    mismatch is only an error when strict_fixed_arrays is on.
    """

    def __init__(self, item: Kind, seed: tuple):
        self.item = item
        self.seed = tuple(seed)

    @property
    def description(self) -> str:
        return "an array"

    def convert(self, parser: ElementParser, value: Any, path: str) -> tuple:
        if json_type(value) is not JsonType.ARRAY:
            raise self.fail(path)

        size = len(self.seed)
        if parser.config.strict_fixed_arrays and len(value) != size:
            raise ElementTypeError(f"Could not parse element '{path}' as an array of {size} elements.", path)

        result = list(self.seed)
        for i in range(min(size, len(value))):
            result[i] = parser.parse(value[i], f"{path}[{i}]", self.item)
        return tuple(result)


Assembler = Callable[["ElementParser", Any, str], Any]


class AssemblerRegistry:
    """Registry of per-type assemblers, keyed by model class."""

    def __init__(self):
        self._by_type: dict[type, Assembler] = {}

    def register(self, entity_type: type) -> Callable[[Assembler], Assembler]:
        """Decorator registering an assembler for entity_type."""
        def decorator(fn: Assembler) -> Assembler:
            self._by_type[entity_type] = fn
            return fn
        return decorator

    def get(self, entity_type: type) -> Assembler:
        try:
            return self._by_type[entity_type]
        except KeyError:
            raise LookupError(f"No assembler registered for {entity_type.__name__}") from None

    @property
    def types(self) -> list[type]:
        """List all registered entity types."""
        return list(self._by_type)


# Global registry instance
registry = AssemblerRegistry()


class Entity(Kind):
    """A structural glTF type, built by its registered assembler."""

    def __init__(self, entity_type: type):
        self.entity_type = entity_type

    @property
    def description(self) -> str:
        return self.entity_type.__name__

    def convert(self, parser: ElementParser, value: Any, path: str) -> Any:
        return registry.get(self.entity_type)(parser, value, path)


class ElementParser:
    """
    Presence and validation policies over the kinds.

    `obj` is the enclosing tree value, `name` the member to read and `path`
    the label of `obj`; the member's own label is "<path>.<name>".
    """

    def __init__(self, config: ParseConfig | None = None):
        self.config = config or ParseConfig()

    def parse(self, value: Any, path: str, kind: Kind) -> Any:
        """Convert a value that is known to be present."""
        return kind.convert(self, value, path)

    def required(self, obj: Any, name: str, path: str, kind: Kind) -> Any:
        value = child(obj, name)
        member_path = f"{path}.{name}"
        if value is MISSING:
            raise MissingElementError(member_path)
        return self.parse(value, member_path, kind)

    def optional(self, obj: Any, name: str, path: str, kind: Kind, default: Any = None) -> Any:
        """Absence is not an error: `default` is returned untouched."""
        value = child(obj, name)
        if value is MISSING:
            return default
        return self.parse(value, f"{path}.{name}", kind)

    def required_mapped(self, obj: Any, name: str, path: str, kind: Kind, table: MappingABC) -> Any:
        raw = self.required(obj, name, path, kind)
        return self._lookup(raw, f"{path}.{name}", table)

    def optional_mapped(
        self,
        obj: Any,
        name: str,
        path: str,
        kind: Kind,
        table: MappingABC,
        default: Any = None,
    ) -> Any:
        """Absence returns `default`; a present value must still be in the table."""
        value = child(obj, name)
        if value is MISSING:
            return default
        member_path = f"{path}.{name}"
        raw = self.parse(value, member_path, kind)
        return self._lookup(raw, member_path, table)

    def fixed(self, obj: Any, name: str, path: str, seed: tuple) -> tuple:
        """Fixed-size float vector/matrix; absent resolves to the seed itself."""
        return self.optional(obj, name, path, FixedArray(FLOAT, seed), tuple(seed))

    def _lookup(self, raw: Any, path: str, table: MappingABC) -> Any:
        try:
            return table[raw]
        except KeyError:
            raise UnexpectedValueError(raw, path) from None
