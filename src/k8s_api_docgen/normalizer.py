"""Doc comment normalization.

Turns the text of a Go doc comment into the description shown to users:

- everything from a `---` line onward is internal and dropped
- blank lines separate paragraphs
- `TODO` lines and `+marker` lines (code generator directives) are dropped
- indented lines are kept as separate preformatted lines
- all other lines are joined into flowing prose

normalize() is idempotent: normalizing its own output changes nothing.
"""

from __future__ import annotations

_RULE = "---"


def _truncate(raw: str) -> str:
    lines = raw.split("\n")
    for i, line in enumerate(lines):
        if line.strip() == _RULE:
            return "\n".join(lines[:i])
    return raw


def normalize(raw: str | None) -> str:
    """Normalize a raw doc comment."""
    if not raw:
        return ""

    buffer: list[str] = []

    def drop_last_char() -> None:
        # Removes the trailing " " or "\n" left by the previous line
        if buffer:
            last = buffer.pop()[:-1]
            if last:
                buffer.append(last)

    for line in _truncate(raw).split("\n"):
        line = line.rstrip()
        leading = line.lstrip()

        if not line:
            if buffer:
                drop_last_char()
                buffer.append("\n\n")
        elif leading.startswith("TODO") or leading.startswith("+"):
            continue
        elif line[0] in " \t":
            drop_last_char()
            buffer.append(f"\n{line}\n")
        else:
            buffer.append(line + " ")

    return "".join(buffer).lstrip("\n").rstrip()
