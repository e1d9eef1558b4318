"""Shared pytest configuration for k8s-api-docgen tests."""

import textwrap

import pytest

from k8s_api_docgen.goparser import parse_go_source

CLUSTER_SOURCE = """
    package v1

    // Cluster represents a thing.
    type Cluster struct {
        // Name of the cluster
        Name string `json:"name"`
        // Size is optional
        Size int `json:"size,omitempty"`
    }
"""


def _go(source: str) -> str:
    return textwrap.dedent(source).lstrip("\n")


@pytest.fixture
def parse():
    """Parse an inline Go snippet into its type declarations."""

    def _parse(source: str):
        return list(parse_go_source(_go(source)).declarations)

    return _parse


@pytest.fixture
def write_go(tmp_path):
    """Write an inline Go snippet to a file under tmp_path."""

    def _write(name: str, source: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_go(source))
        return path

    return _write


@pytest.fixture
def cluster_source():
    return CLUSTER_SOURCE
