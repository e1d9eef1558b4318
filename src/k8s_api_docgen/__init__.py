"""k8s_api_docgen - reference documentation for Kubernetes API types written in Go."""

from k8s_api_docgen.config import DocgenConfig, MarkdownConfig, load_config
from k8s_api_docgen.errors import (
    ConfigError,
    DocgenError,
    GoSyntaxError,
    TemplateRenderError,
    UnreadableSourceError,
    UnsupportedOutputFormatError,
)
from k8s_api_docgen.extractors import extract_from_paths, extract_structures, parse_sources
from k8s_api_docgen.generators import generate_json, generate_markdown, get_generator
from k8s_api_docgen.models import (
    Constructor,
    DocumentedField,
    DocumentedStructure,
    TypeInfo,
)
from k8s_api_docgen.normalizer import normalize

__all__ = [
    "Constructor",
    "ConfigError",
    "DocgenConfig",
    "DocgenError",
    "DocumentedField",
    "DocumentedStructure",
    "GoSyntaxError",
    "MarkdownConfig",
    "TypeInfo",
    "TemplateRenderError",
    "UnreadableSourceError",
    "UnsupportedOutputFormatError",
    "extract_from_paths",
    "extract_structures",
    "generate_json",
    "generate_markdown",
    "get_generator",
    "load_config",
    "normalize",
    "parse_sources",
]
