"""Go source parsing with tree-sitter.

The tree-sitter Go grammar does the parsing; this module maps the type
declarations it finds onto the syntax model in models.py and attaches doc
comments the way the Go parser does: a comment group ending on the line
right before a declaration or field is its lead comment.
"""

from __future__ import annotations

import logging
import re

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from .errors import GoSyntaxError
from .models import (
    ArrayType,
    Ident,
    MapType,
    OpaqueType,
    Pointer,
    Qualified,
    RawField,
    SourceFile,
    StructType,
    TypeDeclaration,
    TypeExpr,
)
from .tags import TagSyntaxError, unquote

log = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

# Everything else at the top level of a file is a statement outside a function
TOP_LEVEL_NODES = frozenset(
    {
        "package_clause",
        "import_declaration",
        "const_declaration",
        "var_declaration",
        "type_declaration",
        "function_declaration",
        "method_declaration",
        "comment",
    }
)

# //go:build, //line, //export and similar directives are not documentation
_DIRECTIVE_RE = re.compile(r"^(?:line |extern |export |[a-z0-9]+:[a-z0-9])")


def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _line(node: Node) -> int:
    return node.start_point[0] + 1


def comment_text(comments: list[str]) -> str:
    """Comment text without markers, as go/ast CommentGroup.Text returns it."""
    lines: list[str] = []
    for c in comments:
        if c.startswith("//"):
            c = c[2:]
            if _DIRECTIVE_RE.match(c):
                continue
            if c.startswith(" "):
                c = c[1:]
        else:
            c = c[2:-2]
        lines.extend(c.split("\n"))

    collapsed: list[str] = []
    for line in (line.rstrip() for line in lines):
        if line or (collapsed and collapsed[-1]):
            collapsed.append(line)
    while collapsed and not collapsed[-1]:
        collapsed.pop()
    if not collapsed:
        return ""
    return "\n".join(collapsed) + "\n"


def _previous(node: Node) -> Node | None:
    # Statement terminators are anonymous "\n" or ";" nodes
    sibling = node.prev_sibling
    while sibling is not None and not sibling.is_named and sibling.type in ("\n", ";"):
        sibling = sibling.prev_sibling
    return sibling


def lead_comment(node: Node) -> str:
    """Text of the comment group ending on the line before node, if any."""
    group: list[Node] = []
    row = node.start_point[0]
    sibling = _previous(node)
    while sibling is not None and sibling.type == "comment":
        end_row = sibling.end_point[0]
        if end_row != row - 1 and not (group and end_row == row):
            break
        group.append(sibling)
        row = sibling.start_point[0]
        sibling = _previous(sibling)

    # Comments sharing a line with the preceding token are its line comment
    if sibling is not None:
        group = [c for c in group if c.start_point[0] != sibling.end_point[0]]
    return comment_text([_text(c) for c in reversed(group)])


def _first_error(node: Node) -> Node | None:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _check_syntax(root: Node) -> None:
    if root.has_error:
        error = _first_error(root) or root
        if error.is_missing:
            raise GoSyntaxError(f"missing {error.type!r}", _line(error))
        snippet = _text(error).split("\n", 1)[0][:40]
        raise GoSyntaxError(f"syntax error near {snippet!r}", _line(error))

    children = [c for c in root.named_children if c.type != "comment"]
    if not children or children[0].type != "package_clause":
        raise GoSyntaxError("expected 'package' clause", _line(children[0]) if children else 1)
    for child in children:
        if child.type not in TOP_LEVEL_NODES:
            raise GoSyntaxError("non-declaration statement outside function body", _line(child))


# Types


def type_expr(node: Node) -> TypeExpr:
    """Map a tree-sitter type node onto the syntax model."""
    kind = node.type
    if kind == "type_identifier":
        return Ident(_text(node))
    if kind == "qualified_type":
        return Qualified(
            _text(node.child_by_field_name("package")),
            _text(node.child_by_field_name("name")),
        )
    if kind == "pointer_type":
        return Pointer(type_expr(node.named_children[-1]))
    if kind == "slice_type":
        return ArrayType(type_expr(node.child_by_field_name("element")))
    if kind in ("array_type", "implicit_length_array_type"):
        length = node.child_by_field_name("length")
        return ArrayType(
            type_expr(node.child_by_field_name("element")),
            length=_text(length) if length is not None else "...",
        )
    if kind == "map_type":
        return MapType(
            type_expr(node.child_by_field_name("key")),
            type_expr(node.child_by_field_name("value")),
        )
    if kind == "struct_type":
        return _struct_type(node)
    if kind == "parenthesized_type":
        return type_expr(node.named_children[-1])
    # Generic instantiations, interfaces, funcs and channels are not looked into
    return OpaqueType(_text(node))


def _struct_type(node: Node) -> StructType:
    fields: list[RawField] = []
    for field_list in node.named_children:
        if field_list.type != "field_declaration_list":
            continue
        for child in field_list.named_children:
            if child.type == "field_declaration":
                fields.append(_field(child))
    return StructType(tuple(fields))


def _field(node: Node) -> RawField:
    names = tuple(_text(n) for n in node.children_by_field_name("name"))
    expr = type_expr(node.child_by_field_name("type"))
    if not names and any(c.type == "*" for c in node.children):
        # Embedded *T: the star is not part of the type node
        expr = Pointer(expr)

    tag = None
    tag_node = node.child_by_field_name("tag")
    if tag_node is not None:
        try:
            tag = unquote(_text(tag_node))
        except TagSyntaxError as e:
            raise GoSyntaxError(str(e), _line(tag_node)) from e

    return RawField(names=names, type=expr, tag=tag, doc=lead_comment(node), line=_line(node))


# Declarations


def _type_spec(node: Node, doc: str, path: str) -> TypeDeclaration:
    name = node.child_by_field_name("name")
    return TypeDeclaration(
        name=_text(name),
        type=type_expr(node.child_by_field_name("type")),
        doc=doc,
        alias=node.type == "type_alias",
        path=path,
        line=_line(name),
    )


def _type_declaration(node: Node, path: str) -> list[TypeDeclaration]:
    decl_doc = lead_comment(node)
    specs = [c for c in node.named_children if c.type in ("type_spec", "type_alias")]
    grouped = any(c.type == "(" for c in node.children)
    if not grouped:
        return [_type_spec(spec, decl_doc, path) for spec in specs]

    declarations = [_type_spec(spec, lead_comment(spec), path) for spec in specs]
    # A lone spec in a group falls back to the group's doc, as go/doc does
    if len(declarations) == 1 and not declarations[0].doc and decl_doc:
        spec = declarations[0]
        declarations[0] = TypeDeclaration(
            name=spec.name,
            type=spec.type,
            doc=decl_doc,
            alias=spec.alias,
            path=spec.path,
            line=spec.line,
        )
    return declarations


def parse_go_source(source: str, path: str = "<source>") -> SourceFile:
    """Parse one Go file into its package name and type declarations."""
    tree = Parser(GO_LANGUAGE).parse(source.encode("utf-8"))
    root = tree.root_node
    _check_syntax(root)

    package = ""
    declarations: list[TypeDeclaration] = []
    for child in root.named_children:
        if child.type == "package_clause":
            package = _text(child.named_children[-1])
        elif child.type == "type_declaration":
            declarations.extend(_type_declaration(child, path))

    log.debug(
        "Parsed %s: package %s, %d type declarations",
        path,
        package,
        len(declarations),
    )
    return SourceFile(path=path, package=package, declarations=tuple(declarations))
