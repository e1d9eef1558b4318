"""Documentation extraction from Go API type declarations."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import DocgenConfig
from .errors import GoSyntaxError, UnreadableSourceError
from .fields import FieldKind, classify_field
from .goparser import parse_go_source
from .models import (
    DocumentedField,
    DocumentedStructure,
    SourceFile,
    TypeDeclaration,
)
from .normalizer import normalize

log = logging.getLogger(__name__)


@dataclass
class ExtractionContext:
    """State of one extraction run.

    Inline fields can only be resolved against structures extracted
    earlier in the same run.
    """

    fields_by_type: dict[str, list[DocumentedField]] = field(default_factory=dict)
    structures: list[DocumentedStructure] = field(default_factory=list)

    def __contains__(self, name: str) -> bool:
        return name in self.fields_by_type

    def record(self, structure: DocumentedStructure) -> None:
        self.fields_by_type[structure.name] = structure.fields
        self.structures.append(structure)

    def inlined_fields(self, type_name: str) -> list[DocumentedField]:
        return list(self.fields_by_type.get(type_name, ()))


def _extract_structure(
    decl: TypeDeclaration, context: ExtractionContext, config: DocgenConfig
) -> DocumentedStructure:
    structure = DocumentedStructure(name=decl.name, doc=normalize(decl.doc))

    for raw_field in decl.type.fields:
        result = classify_field(raw_field, exported_only=config.exported_only)
        if result.kind == FieldKind.DOCUMENTED:
            structure.fields.extend(result.fields)
        elif result.kind == FieldKind.INLINE:
            # External types are documented elsewhere; their fields are not spliced
            embedded = result.type
            if embedded.internal and embedded.base_type in context:
                structure.fields.extend(context.inlined_fields(embedded.base_type))
            else:
                log.debug(
                    "%s: inlined %s not documented in this run, skipping",
                    decl.name,
                    embedded.name or "field",
                )

    return structure


def extract_structures(
    declarations: Iterable[TypeDeclaration],
    config: DocgenConfig | None = None,
) -> list[DocumentedStructure]:
    """Build documented structures from type declarations, in declaration order."""
    config = config or DocgenConfig()
    context = ExtractionContext()

    for decl in declarations:
        if not decl.is_struct:
            continue
        if config.exported_only and not decl.name[:1].isupper():
            log.debug("Skipping unexported type %s", decl.name)
            continue
        if decl.name in context:
            # First declaration wins
            log.warning(
                "Duplicate type %s in %s:%d, keeping the first declaration",
                decl.name,
                decl.path,
                decl.line,
            )
            continue

        context.record(_extract_structure(decl, context, config))

    return context.structures


def parse_sources(paths: Sequence[str | Path]) -> list[SourceFile]:
    """Read and parse every file; the first failure aborts the run."""
    sources: list[SourceFile] = []
    for path in paths:
        try:
            text = Path(path).read_text(encoding="utf-8")
            sources.append(parse_go_source(text, str(path)))
        except OSError as e:
            raise UnreadableSourceError(str(path), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise UnreadableSourceError(str(path), f"not UTF-8 text: {e}") from e
        except GoSyntaxError as e:
            raise UnreadableSourceError(str(path), str(e)) from e
    return sources


def extract_from_paths(
    paths: Sequence[str | Path], config: DocgenConfig | None = None
) -> list[DocumentedStructure]:
    """Parse the given files and extract their documented structures."""
    sources = parse_sources(paths)
    declarations = [decl for source in sources for decl in source.declarations]
    structures = extract_structures(declarations, config)
    log.info(
        "Extracted %d structures from %d files",
        len(structures),
        len(sources),
    )
    return structures
