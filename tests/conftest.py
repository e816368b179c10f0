"""Shared fixtures for Obfuscation Analysis tests."""

import os

import pytest

from obfuscation_analysis.models import TransformationKind

from fakes import FakeTransformer


@pytest.fixture
def both_kinds():
    """One fake transformer per obfuscating kind, keyed by kind."""
    return {kind: FakeTransformer(kind) for kind in TransformationKind.variants()}


@pytest.fixture
def isolated_config_env(tmp_path, monkeypatch):
    """Keep user/project config files and OBFA_* variables out of config tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("OBFA_"):
            monkeypatch.delenv(key)
    return tmp_path
