"""Field classification: JSON name, type, inlining and required status."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .models import (
    ArrayType,
    Constructor,
    DocumentedField,
    Ident,
    MapType,
    OpaqueType,
    Pointer,
    Qualified,
    RawField,
    StructType,
    TypeExpr,
    TypeInfo,
)
from .normalizer import normalize
from .tags import TagValue, parse_struct_tag

log = logging.getLogger(__name__)

TAG_KEY = "json"
INLINE_OPTION = "inline"
OMIT_EMPTY_OPTION = "omitempty"
EXCLUDED_NAME = "-"


class FieldKind(str, Enum):
    DOCUMENTED = "documented"
    INLINE = "inline"  # Splice the embedded type's fields in its place
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class FieldClassification:
    kind: FieldKind
    fields: tuple[DocumentedField, ...] = ()
    type: TypeInfo | None = None  # Embedded type, for INLINE


def field_type(expr: TypeExpr) -> TypeInfo:
    """Resolve the rendered name, base type and origin of a type expression.

    Shapes other than identifiers, pointers, qualified names, arrays and
    maps resolve to an empty TypeInfo.
    """
    match expr:
        case Ident(name=name):
            return TypeInfo(name=name, base_type=name, internal=True)
        case Qualified(package=package, name=name):
            qualified = f"{package}.{name}"
            return TypeInfo(name=qualified, base_type=qualified, internal=False)
        case Pointer(elem=elem):
            inner = field_type(elem)
            return TypeInfo(
                name="*" + inner.name,
                base_type=inner.base_type,
                constructor=Constructor.POINTER,
                internal=inner.internal,
            )
        case ArrayType(elem=elem):
            inner = field_type(elem)
            return TypeInfo(
                name="[]" + inner.name,
                base_type=inner.base_type,
                constructor=Constructor.SLICE,
                internal=inner.internal,
            )
        case MapType(key=key, value=value):
            # JSON object keys are strings; only the value type is tracked
            inner = field_type(value)
            return TypeInfo(
                name=f"map[{field_type(key).name}]{inner.name}",
                base_type=inner.base_type,
                constructor=Constructor.MAP,
                internal=inner.internal,
            )
        case StructType() | OpaqueType():
            log.debug("Unresolved type expression %r", expr)
            return TypeInfo()
    raise TypeError(f"unknown type expression: {expr!r}")


def _embedded_name(expr: TypeExpr) -> str:
    """Field name Go gives an embedded field: the unqualified type name."""
    match expr:
        case Pointer(elem=elem):
            return _embedded_name(elem)
        case Ident(name=name) | Qualified(name=name):
            return name
        case OpaqueType(text=text):
            # Generic instantiation, e.g. pkg.List[int]
            return text.split("[", 1)[0].rsplit(".", 1)[-1]
    return ""


def _is_exported(name: str) -> bool:
    return name[:1].isupper()


def _json_tag(field: RawField) -> TagValue | None:
    if field.tag is None:
        return None
    return parse_struct_tag(field.tag).get(TAG_KEY)


def is_inlined(field: RawField) -> bool:
    tag = _json_tag(field)
    return tag is not None and tag.has_option(INLINE_OPTION)


def field_required(field: RawField) -> bool:
    """A field is required unless its json tag carries omitempty."""
    tag = _json_tag(field)
    if tag is None:
        return True
    return not tag.has_option(OMIT_EMPTY_OPTION)


def _declared_names(field: RawField, exported_only: bool) -> list[str]:
    declared = list(field.names) or [_embedded_name(field.type)]
    if exported_only:
        # encoding/json skips unexported fields whatever their tag says
        declared = [name for name in declared if _is_exported(name)]
    return declared


def field_names(field: RawField, exported_only: bool = False) -> list[str]:
    """JSON names of a field; "-" marks a field left out of the JSON form."""
    declared = _declared_names(field, exported_only)
    if not declared:
        return []
    tag = _json_tag(field)
    if tag is not None and tag.name:
        return [tag.name]
    return declared


def classify_field(field: RawField, exported_only: bool = True) -> FieldClassification:
    """Decide how a struct field shows up in the documentation."""
    if is_inlined(field):
        return FieldClassification(FieldKind.INLINE, type=field_type(field.type))

    names = [name for name in field_names(field, exported_only) if name != EXCLUDED_NAME]
    if not names:
        return FieldClassification(FieldKind.EXCLUDED)

    type_info = field_type(field.type)
    mandatory = field_required(field)
    doc = normalize(field.doc)
    return FieldClassification(
        FieldKind.DOCUMENTED,
        fields=tuple(
            DocumentedField(name=name, type=type_info, doc=doc, mandatory=mandatory)
            for name in names
        ),
    )
