"""Parser for Go struct tags (`key:"value,opt1,opt2" other:"..."`)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

_GO_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

_ESCAPE_RE = re.compile(
    r"\\(?:([abfnrtv\\\"])|x([0-9a-fA-F]{2})|u([0-9a-fA-F]{4})|U([0-9a-fA-F]{8})|([0-7]{3}))"
)


class TagSyntaxError(ValueError):
    pass


def unquote(literal: str) -> str:
    """Unquote a Go string literal, raw (`...`) or interpreted ("...")."""
    if len(literal) < 2 or literal[0] != literal[-1] or literal[0] not in "`\"":
        raise TagSyntaxError(f"not a string literal: {literal!r}")
    body = literal[1:-1]
    if literal[0] == "`":
        # Carriage returns are discarded from raw strings
        return body.replace("\r", "")

    out = []
    pos = 0
    for match in _ESCAPE_RE.finditer(body):
        out.append(_plain_chunk(body[pos : match.start()], literal))
        simple, hex2, hex4, hex8, octal = match.groups()
        if simple:
            out.append(_GO_ESCAPES[simple])
        else:
            out.append(chr(int(hex2 or hex4 or hex8 or octal, 8 if octal else 16)))
        pos = match.end()
    out.append(_plain_chunk(body[pos:], literal))
    return "".join(out)


def _plain_chunk(chunk: str, literal: str) -> str:
    if "\\" in chunk or '"' in chunk or "\n" in chunk:
        raise TagSyntaxError(f"invalid escape in {literal!r}")
    return chunk


@dataclass(frozen=True)
class TagValue:
    """One tag entry split into its name segment and options."""

    name: str
    options: tuple[str, ...] = ()

    def has_option(self, option: str) -> bool:
        return option in self.options

    @classmethod
    def parse(cls, value: str) -> TagValue:
        name, *options = value.split(",")
        return cls(name=name, options=tuple(o.strip() for o in options if o.strip()))


@dataclass(frozen=True)
class StructTag:
    """Parsed struct tag.

    `malformed` is set when parsing stopped early; entries before the
    malformed part are kept, as reflect.StructTag.Lookup does.
    """

    entries: dict[str, str] = field(default_factory=dict)
    malformed: bool = False

    def get(self, key: str) -> TagValue | None:
        value = self.entries.get(key)
        if value is None:
            return None
        return TagValue.parse(value)


def parse_struct_tag(tag: str) -> StructTag:
    """Parse conventional `key:"value"` pairs separated by spaces."""
    entries: dict[str, str] = {}
    rest = tag
    while rest:
        rest = rest.lstrip(" ")
        if not rest:
            break

        i = 0
        while i < len(rest) and rest[i] > " " and rest[i] not in ':"\x7f':
            i += 1
        if i == 0 or i + 1 >= len(rest) or rest[i] != ":" or rest[i + 1] != '"':
            log.debug("Malformed struct tag %r", tag)
            return StructTag(entries=entries, malformed=True)
        key = rest[:i]
        rest = rest[i + 1 :]

        # Scan the quoted value
        i = 1
        while i < len(rest) and rest[i] != '"':
            if rest[i] == "\\":
                i += 1
            i += 1
        if i >= len(rest):
            log.debug("Unterminated value in struct tag %r", tag)
            return StructTag(entries=entries, malformed=True)
        quoted = rest[: i + 1]
        rest = rest[i + 1 :]

        try:
            value = unquote(quoted)
        except TagSyntaxError:
            log.debug("Bad quoting in struct tag %r", tag)
            return StructTag(entries=entries, malformed=True)
        # First occurrence wins, like reflect.StructTag.Get
        entries.setdefault(key, value)

    return StructTag(entries=entries)
