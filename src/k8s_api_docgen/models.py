"""Data models for Go declarations and extracted documentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


# Type expressions, as parsed from Go source


@dataclass(frozen=True)
class Ident:
    name: str  # "string", "ClusterSpec"


@dataclass(frozen=True)
class Pointer:
    elem: TypeExpr


@dataclass(frozen=True)
class Qualified:
    package: str  # "metav1"
    name: str  # "ObjectMeta"


@dataclass(frozen=True)
class ArrayType:
    elem: TypeExpr
    length: str | None = None  # None for slices


@dataclass(frozen=True)
class MapType:
    key: TypeExpr
    value: TypeExpr


@dataclass(frozen=True)
class StructType:
    fields: tuple[RawField, ...] = ()


@dataclass(frozen=True)
class OpaqueType:
    """A type shape the extractor does not look into (func, chan, interface...)."""

    text: str


TypeExpr = Union[Ident, Pointer, Qualified, ArrayType, MapType, StructType, OpaqueType]


@dataclass(frozen=True)
class RawField:
    """A struct field exactly as declared."""

    names: tuple[str, ...]  # Empty for embedded fields
    type: TypeExpr
    tag: str | None = None  # Unquoted tag text, e.g. 'json:"name,omitempty"'
    doc: str = ""  # Lead comment text
    line: int = 0

    @property
    def embedded(self) -> bool:
        return not self.names


@dataclass(frozen=True)
class TypeDeclaration:
    """A named type declaration found in a source file."""

    name: str
    type: TypeExpr
    doc: str = ""
    alias: bool = False  # type A = B
    path: str = ""
    line: int = 0

    @property
    def is_struct(self) -> bool:
        return isinstance(self.type, StructType) and not self.alias


@dataclass(frozen=True)
class SourceFile:
    path: str
    package: str
    declarations: tuple[TypeDeclaration, ...] = ()


# Documentation model


class Constructor(str, Enum):
    NONE = "none"
    POINTER = "pointer"
    SLICE = "slice"
    MAP = "map"


@dataclass(frozen=True)
class TypeInfo:
    """Rendered type of a field and the named type it is built on."""

    name: str = ""  # "*[]Foo", "map[string]Bar"
    base_type: str = ""  # "Foo", "metav1.ObjectMeta"
    constructor: Constructor = Constructor.NONE
    internal: bool = False  # False for package-qualified types


@dataclass(frozen=True)
class DocumentedField:
    name: str  # JSON name
    type: TypeInfo
    doc: str = ""
    mandatory: bool = True


@dataclass
class DocumentedStructure:
    name: str
    doc: str = ""
    fields: list[DocumentedField] = field(default_factory=list)


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # Build fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed
