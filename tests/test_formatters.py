"""Tests for the report renderers."""

import pytest
from rich.console import Console

from obfuscation_analysis.formatters import (
    RichFormatter,
    TextFormatter,
    call_flow_entries,
    get_formatter,
    metric_rows,
)
from obfuscation_analysis.models import RunState, TransformationKind
from obfuscation_analysis.pairing import build_pairs

from fakes import make_file

JSHRINK = TransformationKind.JSHRINK
PROGUARD = TransformationKind.PROGUARD


@pytest.fixture
def state():
    state = RunState()
    state.add_baseline(make_file("/src/A.java", methods=3, fields=2, size=100.0, cpool=20, sites=("x", "y")))
    state.add_variant(make_file("/src/A.java", JSHRINK, methods=3, fields=3, size=150.0, cpool=25, sites=("x", "y")))
    state.add_variant(make_file("/src/A.java", PROGUARD, methods=2, fields=2, size=80.0, cpool=18, sites=("a",)))
    state.add_baseline(make_file("/src/Util.java", methods=1, fields=0, size=40.0, cpool=5))
    state.add_variant(make_file("/src/Util.java", PROGUARD, methods=1, fields=0, size=30.0, cpool=4))
    state.add_baseline(make_file("/src/Lonely.java", sites=("main",)))
    return state


class TestMetricRows:
    def test_baseline_row_injected_once_per_origin(self, state):
        rows = list(metric_rows(build_pairs(state), state))

        assert [(r.origin_path, r.label) for r in rows] == [
            ("/src/A.java", "Original"),
            ("/src/A.java", "JShrink"),
            ("/src/A.java", "ProGuard"),
            ("/src/Util.java", "Original"),
            ("/src/Util.java", "ProGuard"),
        ]

    def test_pair_rows_carry_deltas(self, state):
        rows = list(metric_rows(build_pairs(state), state))
        jshrink = rows[1]

        assert (jshrink.methods, jshrink.fields, jshrink.size, jshrink.cpool_size) == (0, 1, 50.0, 25)

    def test_origin_without_pairs_has_no_rows(self, state):
        rows = list(metric_rows(build_pairs(state), state))
        assert all(r.origin_path != "/src/Lonely.java" for r in rows)


class TestCallFlowEntries:
    def test_skips_empty_baseline_flow(self, state):
        origins = [e.origin_path for e in call_flow_entries(state)]
        assert "/src/Util.java" not in origins

    def test_entries_list_variants_in_order(self, state):
        entry = call_flow_entries(state)[0]
        assert [v.transformation_kind for v in entry.variants] == [JSHRINK, PROGUARD]


class TestTextFormatter:
    def test_header_columns(self, state):
        lines = TextFormatter().format(build_pairs(state), state).splitlines()

        assert lines[0] == "---File Analysis---"
        assert lines[1] == (
            f"{'Obfuscator':>20}{'File Name':>25}{'Methods':>20}{'Size':>20}{'Fields':>20}{'Constant Pool':>20}"
        )

    def test_fixed_width_rows(self, state):
        lines = TextFormatter().format(build_pairs(state), state).splitlines()

        assert lines[2] == f"{'Original':>20}{'A.class':>25}{3:>20}{'100.000000':>20}{2:>20}{20:>20}"
        assert lines[3] == f"{'JShrink':>20}{'A.class':>25}{0:>20}{'50.000000':>20}{1:>20}{25:>20}"
        assert lines[4] == f"{'ProGuard':>20}{'A.class':>25}{-1:>20}{'-20.000000':>20}{0:>20}{18:>20}"

    def test_call_flow_section(self, state):
        text = TextFormatter().format(build_pairs(state), state)
        section = text.split("--- Call Flow Analysis ---\n", 1)[1]

        assert section.startswith("--- File: /src/A.java ---\nOriginal Call Flow:\nx\ny\n")
        assert "Obfuscation Type: JShrink\nObfuscated Call Flow:\nx\ny\n" in section
        assert "Obfuscation Type: ProGuard\nObfuscated Call Flow:\na\n" in section
        assert "/src/Util.java" not in section

    def test_render_writes_to_stdout(self, state, capsys):
        TextFormatter().render(build_pairs(state), state)
        assert "---File Analysis---" in capsys.readouterr().out


class TestRichFormatter:
    def test_contains_same_rows(self, state):
        console = Console(width=200, force_terminal=False, color_system=None)
        text = RichFormatter(console=console).format(build_pairs(state), state)

        assert "Constant Pool" in text
        assert "JShrink" in text
        assert "+50.000000" in text
        assert "/src/A.java" in text
        assert "/src/Util.java" not in text.split("Call Flow Analysis", 1)[1]


class TestGetFormatter:
    def test_known_names(self):
        assert isinstance(get_formatter("text"), TextFormatter)
        assert isinstance(get_formatter("rich"), RichFormatter)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("json")
