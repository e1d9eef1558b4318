"""Generator configuration and the built-in Kubernetes link table."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

log = logging.getLogger(__name__)

KUBERNETES_API_DOCS = "https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.20/"

# Qualified Kubernetes types -> reference documentation
DEFAULT_EXTERNAL_LINKS: dict[str, str] = {
    "metav1.ObjectMeta": KUBERNETES_API_DOCS + "#objectmeta-v1-meta",
    "metav1.ListMeta": KUBERNETES_API_DOCS + "#listmeta-v1-meta",
    "metav1.LabelSelector": KUBERNETES_API_DOCS + "#labelselector-v1-meta",
    "metav1.Time": KUBERNETES_API_DOCS + "#time-v1-meta",
    "v1.ResourceRequirements": KUBERNETES_API_DOCS + "#resourcerequirements-v1-core",
    "v1.LocalObjectReference": KUBERNETES_API_DOCS + "#localobjectreference-v1-core",
    "v1.SecretKeySelector": KUBERNETES_API_DOCS + "#secretkeyselector-v1-core",
    "v1.PersistentVolumeClaim": KUBERNETES_API_DOCS + "#persistentvolumeclaim-v1-core",
    "v1.EmptyDirVolumeSource": KUBERNETES_API_DOCS + "#emptydirvolumesource-v1-core",
    "apiextensionsv1.JSON": KUBERNETES_API_DOCS + "#json-v1-apiextensions-k8s-io",
    "corev1.LocalObjectReference": KUBERNETES_API_DOCS + "#localobjectreference-v1-core",
    "corev1.ResourceRequirements": KUBERNETES_API_DOCS + "#resourcerequirements-v1-core",
    "corev1.PersistentVolumeClaimSpec": KUBERNETES_API_DOCS + "#persistentvolumeclaim-v1-core",
    "corev1.SecretKeySelector": KUBERNETES_API_DOCS + "#secretkeyselector-v1-core",
    "corev1.ConfigMapKeySelector": KUBERNETES_API_DOCS + "#configmapkeyselector-v1-core",
}


@dataclass(frozen=True)
class MarkdownConfig:
    """Title and table headers of the Markdown output."""

    title: str = "API Reference"
    name_header: str = "Name"
    description_header: str = "Description"
    type_header: str = "Type"
    required_header: str = "Required"
    template: str | None = None  # Jinja2 source replacing the built-in layout


@dataclass(frozen=True)
class DocgenConfig:
    external_links: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_EXTERNAL_LINKS)
    )
    exported_only: bool = True  # Skip unexported types and fields
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)


_TOP_LEVEL_KEYS = {"exported_only", "replace_default_links", "external_links", "markdown"}
_HEADER_KEYS = {"name", "description", "type", "required"}


def _expect(value: Any, kind: type, where: str) -> Any:
    if not isinstance(value, kind):
        raise ConfigError(f"{where}: expected {kind.__name__}, got {type(value).__name__}")
    return value


def _string_map(value: Any, where: str) -> dict[str, str]:
    _expect(value, dict, where)
    for key, item in value.items():
        _expect(key, str, where)
        _expect(item, str, f"{where}.{key}")
    return dict(value)


def _unknown_keys(data: dict, allowed: set[str], where: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(f"{where}: unknown keys: {', '.join(map(str, unknown))}")


def _read_template(value: Any, base_dir: Path) -> str:
    path = base_dir / _expect(value, str, "markdown.template")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read template {path}: {e.strerror or e}") from e


def _markdown_config(data: Any, base_dir: Path) -> MarkdownConfig:
    _expect(data, dict, "markdown")
    _unknown_keys(data, {"title", "headers", "template"}, "markdown")
    values: dict[str, str] = {}
    if "title" in data:
        values["title"] = _expect(data["title"], str, "markdown.title")
    if "headers" in data:
        headers = _string_map(data["headers"], "markdown.headers")
        _unknown_keys(headers, _HEADER_KEYS, "markdown.headers")
        values.update({f"{key}_header": text for key, text in headers.items()})
    if "template" in data:
        values["template"] = _read_template(data["template"], base_dir)
    return MarkdownConfig(**values)


def config_from_dict(data: dict[str, Any], base_dir: str | Path = ".") -> DocgenConfig:
    """Build a configuration from parsed YAML, validating every key.

    Relative template paths are resolved against base_dir.
    """
    _expect(data, dict, "config")
    _unknown_keys(data, _TOP_LEVEL_KEYS, "config")

    links: dict[str, str] = {}
    if not _expect(data.get("replace_default_links", False), bool, "replace_default_links"):
        links.update(DEFAULT_EXTERNAL_LINKS)
    links.update(_string_map(data.get("external_links") or {}, "external_links"))

    markdown = MarkdownConfig()
    if "markdown" in data:
        markdown = _markdown_config(data["markdown"], Path(base_dir))
    return DocgenConfig(
        external_links=links,
        exported_only=_expect(data.get("exported_only", True), bool, "exported_only"),
        markdown=markdown,
    )


def load_config(path: str | Path) -> DocgenConfig:
    """Load a YAML configuration file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    config = config_from_dict(data, path.parent)
    log.debug(
        "Loaded %s: %d external links",
        path,
        len(config.external_links),
    )
    return config
