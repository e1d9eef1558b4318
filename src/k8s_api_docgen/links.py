"""Link resolution for field types in rendered documentation."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from enum import Enum

from .models import TypeInfo


class ReferenceKind(str, Enum):
    ANCHOR = "anchor"  # Type documented in the same run
    EXTERNAL = "external"  # Known Kubernetes type
    PLAIN = "plain"  # No documentation to point at


@dataclass(frozen=True)
class Reference:
    kind: ReferenceKind
    target: str | None = None  # "#ClusterSpec" or a URL


def resolve_reference(
    base_type: str,
    internal: bool,
    known_internal: Collection[str],
    external_links: Mapping[str, str],
) -> Reference:
    """Decide where a type's name should link to."""
    if internal:
        if base_type in known_internal:
            return Reference(ReferenceKind.ANCHOR, f"#{base_type}")
        return Reference(ReferenceKind.PLAIN)

    link = external_links.get(base_type)
    if link:
        return Reference(ReferenceKind.EXTERNAL, link)
    return Reference(ReferenceKind.PLAIN)


def render_type_link(
    type_info: TypeInfo,
    known_internal: Collection[str],
    external_links: Mapping[str, str],
) -> str:
    """Markdown for a field type, e.g. [*ClusterSpec](#ClusterSpec)."""
    reference = resolve_reference(
        type_info.base_type, type_info.internal, known_internal, external_links
    )
    if reference.target is None:
        return type_info.name
    return f"[{type_info.name}]({reference.target})"
