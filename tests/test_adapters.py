"""Tests for the external-tool adapters, with subprocess calls stubbed out."""

import json
import subprocess
from pathlib import Path

import pytest

from obfuscation_analysis.adapters import (
    CommandExtractor,
    CommandTransformer,
    FileCollector,
    JavacCompiler,
    build_transformers,
)
from obfuscation_analysis.adapters._process import expand_command
from obfuscation_analysis.adapters.extractor import parse_extraction
from obfuscation_analysis.config import AnalysisConfig, ToolConfig
from obfuscation_analysis.exceptions import (
    CompilationError,
    ErrorCode,
    ExtractionError,
    TransformationError,
)
from obfuscation_analysis.models import TransformationKind


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestExpandCommand:
    def test_substitutes_placeholders(self):
        command = expand_command(
            ["tool", "--in={input}", "{output_dir}"],
            {"input": Path("/a/B.class"), "output_dir": Path("/out")},
        )
        assert command == ["tool", "--in=/a/B.class", "/out"]


class TestFileCollector:
    def test_collects_matching_files_recursively(self, tmp_path):
        (tmp_path / "pkg").mkdir()
        (tmp_path / "build").mkdir()
        (tmp_path / "A.java").write_text("")
        (tmp_path / "pkg" / "B.java").write_text("")
        (tmp_path / "build" / "C.java").write_text("")
        (tmp_path / "notes.txt").write_text("")

        found = FileCollector(exclude_patterns=["build/*"]).collect(tmp_path, "java")

        assert list(found) == [str(tmp_path / "A.java"), str(tmp_path / "pkg" / "B.java")]
        assert all(p.is_absolute() for p in found.values())

    def test_empty_tree(self, tmp_path):
        assert FileCollector().collect(tmp_path, "java") == {}

    def test_skips_symlinked_files_by_default(self, tmp_path):
        target = tmp_path / "elsewhere"
        target.mkdir()
        (target / "Real.txt").write_text("class Real {}")
        root = tmp_path / "src"
        root.mkdir()
        (root / "A.java").write_text("")
        (root / "Link.java").symlink_to(target / "Real.txt")

        found = FileCollector().collect(root, "java")

        assert list(found) == [str(root / "A.java")]

    def test_follows_symlinked_files_when_enabled(self, tmp_path):
        target = tmp_path / "elsewhere"
        target.mkdir()
        (target / "Real.txt").write_text("class Real {}")
        root = tmp_path / "src"
        root.mkdir()
        (root / "A.java").write_text("")
        (root / "Link.java").symlink_to(target / "Real.txt")

        found = FileCollector(follow_symlinks=True).collect(root, "java")

        assert list(found) == [str(root / "A.java"), str(root / "Link.java")]


class TestJavacCompiler:
    def test_returns_class_beside_source(self, tmp_path, monkeypatch):
        source = tmp_path / "Main.java"
        source.write_text("class Main {}")
        seen = {}

        def fake_run(template, values, timeout=None, cwd=None):
            seen.update(values)
            (tmp_path / "Main.class").write_bytes(b"")
            return _completed()

        monkeypatch.setattr("obfuscation_analysis.adapters.compiler.run_tool", fake_run)

        compiled = JavacCompiler(["javac", "{input}"]).compile(source)

        assert compiled == tmp_path / "Main.class"
        assert seen["input"] == source

    def test_nonzero_exit_is_none(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            "obfuscation_analysis.adapters.compiler.run_tool",
            lambda *a, **k: _completed(1, stderr="error: ';' expected"),
        )
        assert JavacCompiler(["javac", "{input}"]).compile(tmp_path / "Bad.java") is None

    def test_missing_output_is_none(self, tmp_path, monkeypatch):
        monkeypatch.setattr("obfuscation_analysis.adapters.compiler.run_tool", lambda *a, **k: _completed())
        assert JavacCompiler(["javac", "{input}"]).compile(tmp_path / "Main.java") is None

    def test_missing_executable_raises(self, tmp_path, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError("javac")

        monkeypatch.setattr("obfuscation_analysis.adapters.compiler.run_tool", missing)
        with pytest.raises(CompilationError) as exc_info:
            JavacCompiler(["javac", "{input}"]).compile(tmp_path / "Main.java")
        assert exc_info.value.code is ErrorCode.OA202


class TestCommandTransformer:
    def test_output_goes_to_kind_directory(self, tmp_path, monkeypatch):
        compiled = tmp_path / "Main.class"
        compiled.write_bytes(b"")

        def fake_run(template, values, timeout=None, cwd=None):
            values["output"].write_bytes(b"obfuscated")
            return _completed()

        monkeypatch.setattr("obfuscation_analysis.adapters.transformer.run_tool", fake_run)
        transformer = CommandTransformer(TransformationKind.PROGUARD, ["pg", "{input}"], tmp_path / "out")

        assert transformer.transform(compiled) == tmp_path / "out" / "proguard" / "Main.class"

    def test_no_output_is_none(self, tmp_path, monkeypatch):
        monkeypatch.setattr("obfuscation_analysis.adapters.transformer.run_tool", lambda *a, **k: _completed())
        transformer = CommandTransformer(TransformationKind.JSHRINK, ["js", "{input}"], tmp_path)

        assert transformer.transform(tmp_path / "Main.class") is None

    def test_stale_output_is_not_reused(self, tmp_path, monkeypatch):
        stale = tmp_path / "jshrink" / "Main.class"
        stale.parent.mkdir()
        stale.write_bytes(b"old")
        monkeypatch.setattr(
            "obfuscation_analysis.adapters.transformer.run_tool", lambda *a, **k: _completed()
        )
        transformer = CommandTransformer(TransformationKind.JSHRINK, ["js", "{input}"], tmp_path)

        assert transformer.transform(tmp_path / "Main.class") is None

    def test_missing_executable_raises(self, tmp_path, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError("proguard")

        monkeypatch.setattr("obfuscation_analysis.adapters.transformer.run_tool", missing)
        transformer = CommandTransformer(TransformationKind.PROGUARD, ["pg", "{input}"], tmp_path)
        with pytest.raises(TransformationError):
            transformer.transform(tmp_path / "Main.class")

    def test_baseline_kind_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            CommandTransformer(TransformationKind.NONE, ["x", "{input}"], tmp_path)

    def test_build_transformers_follows_config(self):
        tools = ToolConfig(transformers={"proguard": ["pg", "{input}"]})
        transformers = build_transformers(AnalysisConfig(tools=tools))

        assert list(transformers) == [TransformationKind.PROGUARD]


class TestParseExtraction:
    def test_parses_call_flow_once(self):
        payload = {
            "methods": 4,
            "fields": 2,
            "size": 812,
            "constant_pool": 41,
            "call_depth": 3,
            "call_flow": "[Main.main, Main.run,  Util.help]",
        }
        raw = parse_extraction(payload, Path("Main.class"))

        assert raw.method_count == 4
        assert raw.byte_size == 812.0
        assert raw.call_sites == ("Main.main", "Main.run", "Util.help")

    def test_call_flow_as_list(self):
        payload = {"methods": 1, "fields": 0, "size": 1, "constant_pool": 1, "call_flow": ["a", "b"]}
        assert parse_extraction(payload, Path("A.class")).call_sites == ("a", "b")

    def test_size_falls_back_to_file_size(self, tmp_path):
        compiled = tmp_path / "A.class"
        compiled.write_bytes(b"x" * 64)

        raw = parse_extraction({"methods": 1, "fields": 0, "constant_pool": 3}, compiled)

        assert raw.byte_size == 64.0
        assert raw.call_sites == ()

    def test_unanalyzable(self):
        assert parse_extraction(None, Path("A.class")) is None
        assert parse_extraction({"analyzable": False}, Path("A.class")) is None

    def test_missing_keys(self):
        with pytest.raises(ExtractionError, match="missing keys: fields, constant_pool"):
            parse_extraction({"methods": 1}, Path("A.class"))

    def test_bad_values(self):
        with pytest.raises(ExtractionError) as exc_info:
            parse_extraction({"methods": "many", "fields": 0, "size": 1, "constant_pool": 1}, Path("A.class"))
        assert exc_info.value.code is ErrorCode.OA401


class TestCommandExtractor:
    def test_reads_json_stdout(self, monkeypatch):
        report = {"methods": 2, "fields": 1, "size": 300, "constant_pool": 17, "call_flow": "[x,y]"}
        monkeypatch.setattr(
            "obfuscation_analysis.adapters.extractor.run_tool",
            lambda *a, **k: _completed(stdout=json.dumps(report)),
        )

        raw = CommandExtractor(["analyze", "{input}"]).extract(Path("A.class"))

        assert raw.constant_pool_size == 17
        assert raw.call_sites == ("x", "y")

    def test_nonzero_exit_raises(self, monkeypatch):
        monkeypatch.setattr(
            "obfuscation_analysis.adapters.extractor.run_tool",
            lambda *a, **k: _completed(2, stderr="bad magic"),
        )
        with pytest.raises(ExtractionError, match="bad magic"):
            CommandExtractor(["analyze", "{input}"]).extract(Path("A.class"))

    def test_invalid_json_raises(self, monkeypatch):
        monkeypatch.setattr(
            "obfuscation_analysis.adapters.extractor.run_tool",
            lambda *a, **k: _completed(stdout="not json"),
        )
        with pytest.raises(ExtractionError) as exc_info:
            CommandExtractor(["analyze", "{input}"]).extract(Path("A.class"))
        assert exc_info.value.code is ErrorCode.OA401
