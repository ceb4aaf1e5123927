"""Tests for the batch driver."""

from __future__ import annotations

import io
import os
import subprocess

import pytest

from hmi_api_typegen import run as run_module
from hmi_api_typegen.run import (
    TypeCheckError,
    collect_schema_paths,
    generate_declarations,
    output_path_for,
    read_input,
    validate_with_tsc,
)


@pytest.fixture
def schema_tree(tmp_path, sample_schema_path):
    """Create a directory tree with interface descriptions."""
    root = tmp_path / "interfaces"
    nested = root / "nested"
    nested.mkdir(parents=True)

    content = sample_schema_path.read_text(encoding="utf8")
    (root / "HMI_API.xml").write_text(content)
    (root / "MOBILE_API.xml").write_text(content)
    (nested / "Extra.xml").write_text(content)
    (root / "notes.txt").write_text("not a schema")
    return root


class TestPaths:
    """Test the expansion of input paths."""

    def test_output_path_beside_schema(self):
        assert output_path_for(os.path.join("interfaces", "HMI_API.xml")) == os.path.join("interfaces", "HMI_API.d.ts")

    def test_output_path_in_output_dir(self):
        assert output_path_for(os.path.join("a", "HMI_API.xml"), "out") == os.path.join("out", "HMI_API.d.ts")

    def test_directory(self, schema_tree):
        paths = collect_schema_paths(["interfaces"], [], False, str(schema_tree.parent))
        assert [os.path.basename(p) for p in paths] == ["HMI_API.xml", "MOBILE_API.xml"]

    def test_directory_recursive(self, schema_tree):
        paths = collect_schema_paths(["interfaces"], [], True, str(schema_tree.parent))
        assert sorted(os.path.basename(p) for p in paths) == ["Extra.xml", "HMI_API.xml", "MOBILE_API.xml"]

    def test_glob_with_excludes(self, schema_tree):
        paths = collect_schema_paths(["interfaces/*.xml"], ["interfaces/MOBILE_*"], False, str(schema_tree.parent))
        assert [os.path.basename(p) for p in paths] == ["HMI_API.xml"]

    def test_no_matches(self, schema_tree):
        assert collect_schema_paths(["missing/*.xml"], [], False, str(schema_tree.parent)) == []


class TestGenerateDeclarations:
    """Test generation for a single interface description."""

    def test_read_input_returns_raw_bytes(self, tmp_path):
        path = tmp_path / "Latin.xml"
        path.write_bytes("<interfaces>Gr\u00f6\u00dfe</interfaces>".encode("latin-1"))
        assert read_input(str(path)) == b"<interfaces>Gr\xf6\xdfe</interfaces>"

    def test_writes_output_file(self, sample_schema_path, tmp_path):
        output_path = tmp_path / "HMI_API.d.ts"
        output = generate_declarations(str(sample_schema_path), str(output_path))

        assert output_path.read_text(encoding="utf8") == output
        assert output.startswith("// Automatically generated by hmi-api-typegen.")

    def test_stdin_to_stdout(self, sample_schema_path, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(sample_schema_path.read_bytes())))

        output = generate_declarations(generator_name="scripts/generate.py")

        assert capsys.readouterr().out == output
        assert output.startswith("// Automatically generated by scripts/generate.py.")


class TestValidation:
    """Test the tsc validation of generated files."""

    def test_no_files(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", pytest.fail)
        validate_with_tsc([])

    def test_success(self, monkeypatch):
        calls = []

        def fake_run(command, **kwargs):
            calls.append(command)
            return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

        monkeypatch.setattr(run_module.subprocess, "run", fake_run)
        validate_with_tsc(["a.d.ts", "b.d.ts"])

        assert calls == [["tsc", "--noEmit", "a.d.ts", "b.d.ts"]]

    def test_type_errors(self, monkeypatch):
        stdout = "a.d.ts(3,5): error TS2304: Cannot find name 'Missing'.\n"
        monkeypatch.setattr(
            run_module.subprocess,
            "run",
            lambda command, **kwargs: subprocess.CompletedProcess(command, 2, stdout=stdout, stderr=""),
        )

        with pytest.raises(TypeCheckError, match="1 error"):
            validate_with_tsc(["a.d.ts"])

    def test_missing_tsc(self, monkeypatch):
        def fake_run(command, **kwargs):
            raise FileNotFoundError(command[0])

        monkeypatch.setattr(run_module.subprocess, "run", fake_run)

        with pytest.raises(TypeCheckError, match="not found"):
            validate_with_tsc(["a.d.ts"])
