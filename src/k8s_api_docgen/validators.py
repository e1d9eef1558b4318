"""Doc comment checks and coverage for extracted structures."""

from __future__ import annotations

from .models import DocumentedStructure, ValidationResult


def validate_docs(
    structures: list[DocumentedStructure],
    strict: bool = False,
) -> ValidationResult:
    """Report structures and fields that have no doc comment.

    Args:
        structures: Output of the extraction pass
        strict: Report missing docs as errors rather than warnings

    Returns:
        ValidationResult; the CLI fails the run when errors is non-empty
    """
    result = ValidationResult()
    problems = result.errors if strict else result.warnings

    for s in structures:
        if not s.doc:
            problems.append(f"{s.name}: missing description")
        for f in s.fields:
            if not f.doc:
                problems.append(f"{s.name}.{f.name}: missing description")

    return result


def compute_coverage(structures: list[DocumentedStructure]) -> dict[str, float]:
    """Share of structures and of fields that carry a description.

    Returns:
        {"structures": ratio, "fields": ratio}, each 1.0 when there is nothing to count
    """
    documented_structs = sum(1 for s in structures if s.doc)
    fields = [f for s in structures for f in s.fields]
    documented_fields = sum(1 for f in fields if f.doc)

    return {
        "structures": documented_structs / len(structures) if structures else 1.0,
        "fields": documented_fields / len(fields) if fields else 1.0,
    }
