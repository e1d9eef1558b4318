"""Tests for the command-line interface."""

import json

import pytest

from k8s_api_docgen.cli import collect_paths, main


@pytest.fixture
def cluster_file(write_go, cluster_source):
    return write_go("api/v1/cluster_types.go", cluster_source)


def test_json_to_stdout(cluster_file, capsys):
    assert main([str(cluster_file)]) == 0

    out = capsys.readouterr().out
    assert out.endswith("\n")
    (cluster,) = json.loads(out)
    assert cluster["name"] == "Cluster"
    assert [item["field"] for item in cluster["items"]] == ["name", "size"]


def test_markdown_to_file(cluster_file, tmp_path, capsys):
    output = tmp_path / "api.md"

    assert main(["-t", "md", "-o", str(output), str(cluster_file)]) == 0

    text = output.read_text()
    assert "## Cluster" in text
    assert "`size` | Size is optional    | int    | false" in text
    assert text.endswith("\n")
    assert capsys.readouterr().out == ""


def test_directory_argument(cluster_file, write_go, capsys):
    write_go("api/v1/helpers.go", "package v1\ntype Helper struct{}\n")

    assert main([str(cluster_file.parent)]) == 0

    assert [s["name"] for s in json.loads(capsys.readouterr().out)] == ["Cluster"]


def test_custom_pattern(cluster_file, write_go, capsys):
    write_go("api/v1/helpers.go", "package v1\ntype Helper struct{}\n")

    assert main(["--pattern", "*.go", str(cluster_file.parent)]) == 0

    names = [s["name"] for s in json.loads(capsys.readouterr().out)]
    assert names == ["Cluster", "Helper"]


def test_config_file(cluster_file, tmp_path, capsys):
    config = tmp_path / "docgen.yaml"
    config.write_text("markdown:\n  title: Cluster API\n")

    assert main(["-t", "md", "-c", str(config), str(cluster_file)]) == 0

    assert "# Cluster API" in capsys.readouterr().out


def test_unsupported_format(cluster_file, capsys):
    assert main(["-t", "html", str(cluster_file)]) == 2

    assert capsys.readouterr().out == ""


def test_missing_source(tmp_path, capsys):
    assert main([str(tmp_path / "missing_types.go")]) == 1

    assert capsys.readouterr().out == ""


def test_invalid_config(cluster_file, tmp_path):
    config = tmp_path / "docgen.yaml"
    config.write_text("unknown: true\n")

    assert main(["-c", str(config), str(cluster_file)]) == 1


def test_strict_fails_on_missing_docs(write_go, capsys):
    path = write_go("types.go", "package v1\ntype Undocumented struct{}\n")

    assert main(["--strict", str(path)]) == 1
    assert capsys.readouterr().out == ""


def test_missing_docs_allowed_without_strict(write_go):
    path = write_go("types.go", "package v1\ntype Undocumented struct{}\n")

    assert main([str(path)]) == 0


def test_paths_are_required():
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2


def test_collect_paths_keeps_argument_order(write_go, tmp_path):
    b = write_go("b/b_types.go", "package b\n")
    a = write_go("a/a_types.go", "package a\n")
    single = write_go("single.go", "package v1\n")

    assert collect_paths([str(b.parent), str(single), str(a.parent)]) == [b, single, a]


def test_collect_paths_empty_directory(tmp_path, caplog):
    assert collect_paths([str(tmp_path)]) == []
    assert "No files matching" in caplog.text


def test_markdown_template(cluster_file, tmp_path, capsys):
    (tmp_path / "reference.md.j2").write_text(
        "{% for s in structures %}{{ s.name }}={{ s.fields | length }}\n{% endfor %}"
    )
    config = tmp_path / "docgen.yaml"
    config.write_text("markdown:\n  template: reference.md.j2\n")

    assert main(["-t", "md", "-c", str(config), str(cluster_file)]) == 0

    assert capsys.readouterr().out == "Cluster=2\n"


def test_broken_template(cluster_file, tmp_path, capsys):
    (tmp_path / "reference.md.j2").write_text("{{ undefined_name }}")
    config = tmp_path / "docgen.yaml"
    config.write_text("markdown:\n  template: reference.md.j2\n")

    assert main(["-t", "md", "-c", str(config), str(cluster_file)]) == 1
    assert capsys.readouterr().out == ""
