"""
Integration Tests

End-to-end analysis through DependencyAnalyzer, the text report, the
settings layer and the command line.
"""

import json

import pytest

from depgraph import DependencyAnalyzer, analyze, field_resolver
from depgraph.analysis.display import format_report
from depgraph.cli import EXIT_CYCLES, EXIT_ERROR, EXIT_OK, main
from depgraph.config import Settings
from depgraph.core.mutator import add_dependency, remove_dependency

from conftest import assert_bidirectional, assert_edge_counts


# =============================================================================
# Analyzer Scenarios
# =============================================================================

class TestAnalyzerScenarios:
    """Example scenarios for the analyzer facade."""

    def test_linear_registry(self, linear_registry, resolver):
        result = analyze(linear_registry, resolver)
        graph = result.graph
        assert graph.roots == ["A"]
        assert graph.leaves == ["C"]
        assert [graph.nodes[n].depth for n in ("A", "B", "C")] == [0, 1, 2]
        assert result.topological_order == ["A", "B", "C"]
        assert result.cycles == []
        assert result.is_acyclic

    def test_mutual_registry(self, mutual_registry, resolver):
        result = analyze(mutual_registry, resolver)
        assert len(result.cycles) == 1
        assert set(result.cycles[0].affected) == {"A", "B"}
        assert result.topological_order is None
        assert result.statistics.circular_dependencies == 1

    def test_resolver_failure_diagnostic(self):
        def resolver(metadata):
            if metadata == "bad":
                raise KeyError("extends")
            return []

        result = DependencyAnalyzer(resolver=resolver).analyze({"X": "bad", "Y": "ok"})
        assert "X" in result.graph
        assert result.graph.nodes["X"].dependencies == set()
        assert [d.entity_id for d in result.failures] == ["X"]

    def test_template_registry_with_default_resolver(self, template_records):
        result = DependencyAnalyzer().analyze(template_records)
        assert result.topological_order == [
            "layout/desktop/base", "mixin/desktop/theme",
            "layout/desktop/admin", "page/desktop/dashboard",
        ]
        assert result.statistics.max_depth == 2
        assert len(result.diagnostics) == 1

    def test_per_call_resolver_override(self):
        registry = {"a": {"parent": "b"}, "b": {}}
        analyzer = DependencyAnalyzer()
        assert analyzer.analyze(registry).graph.edge_count == 0
        assert analyzer.analyze(registry, resolver=field_resolver("parent")).graph.edge_count == 1
        # override does not stick
        assert analyzer.analyze(registry).graph.edge_count == 0

    def test_idempotent_analysis(self, diamond_registry, resolver):
        analyzer = DependencyAnalyzer(resolver=resolver)
        first = analyzer.analyze(diamond_registry)
        second = analyzer.analyze(diamond_registry)
        assert first.graph is not second.graph
        assert first.graph.to_dict() == second.graph.to_dict()
        assert first.topological_order == second.topological_order

    def test_live_graph_analysis(self, linear_registry, resolver):
        analyzer = DependencyAnalyzer(resolver=resolver)
        graph = analyzer.analyze(linear_registry).graph

        add_dependency(graph, "D", "C")
        result = analyzer.analyze_graph(graph)
        assert graph.depths_stale is False
        assert graph.nodes["D"].depth == 3
        assert result.topological_order == ["A", "B", "C", "D"]

        add_dependency(graph, "A", "D")
        assert analyzer.analyze_graph(graph).topological_order is None
        remove_dependency(graph, "A", "D")
        assert analyzer.analyze_graph(graph).is_acyclic
        assert_bidirectional(graph)
        assert_edge_counts(graph)

    def test_cycle_count_can_be_disabled(self, mutual_registry, resolver):
        result = DependencyAnalyzer(resolver=resolver, detect_cycles=False).analyze(mutual_registry)
        assert result.statistics.circular_dependencies == 0
        # cycles and load order still agree
        assert result.has_cycles
        assert len(result.cycles) == 1
        assert result.topological_order is None

        text = format_report(result)
        assert "Circular dependencies (1)" in text
        assert "No circular dependencies found" not in text

    def test_result_to_dict(self, linear_registry, resolver):
        data = analyze(linear_registry, resolver).to_dict()
        assert data["graph"]["edge_count"] == 2
        assert data["statistics"]["total_nodes"] == 3
        json.dumps(data)


# =============================================================================
# Report Tests
# =============================================================================

class TestReport:
    """Tests for the text report."""

    def test_acyclic_report(self, linear_registry, resolver):
        text = format_report(analyze(linear_registry, resolver))
        assert "Total entities:          3" in text
        assert "No circular dependencies found" in text
        assert "A -> B -> C" in text
        assert "\033[" not in text

    def test_cyclic_report(self, mutual_registry, resolver):
        text = format_report(analyze(mutual_registry, resolver))
        assert "Circular dependencies (1)" in text
        assert "1. A -> B -> A" in text
        assert "Load order unavailable" in text

    def test_order_limit(self, resolver):
        registry = {f"n{i}": {"deps": []} for i in range(15)}
        text = format_report(analyze(registry, resolver), order_limit=10)
        assert "n9" in text
        assert "n10 " not in text
        assert "... (5 more)" in text

    def test_failures_listed(self):
        def resolver(metadata):
            raise RuntimeError("boom")

        text = format_report(analyze({"X": {}}, resolver))
        assert "Resolver failures (1)" in text
        assert "X: RuntimeError: boom" in text

    def test_colored_report(self, linear_registry, resolver):
        text = format_report(analyze(linear_registry, resolver), color=True)
        assert "\033[" in text


# =============================================================================
# Settings Tests
# =============================================================================

class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        for name in ("DEPGRAPH_LOG_LEVEL", "DEPGRAPH_REPORT_LIMIT", "DEPGRAPH_LAYOUT",
                     "DEPGRAPH_DETECT_CYCLES"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings == Settings()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DEPGRAPH_LOG_LEVEL", "debug")
        monkeypatch.setenv("DEPGRAPH_REPORT_LIMIT", "3")
        monkeypatch.setenv("DEPGRAPH_LAYOUT", "tree")
        monkeypatch.setenv("DEPGRAPH_DETECT_CYCLES", "no")
        settings = Settings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.report_limit == 3
        assert settings.layout == "tree"
        assert settings.detect_cycles is False

    def test_invalid_report_limit(self, monkeypatch):
        monkeypatch.setenv("DEPGRAPH_REPORT_LIMIT", "ten")
        with pytest.raises(ValueError, match="DEPGRAPH_REPORT_LIMIT"):
            Settings.from_env()

    def test_blank_report_limit_uses_default(self, monkeypatch):
        monkeypatch.setenv("DEPGRAPH_REPORT_LIMIT", " ")
        assert Settings.from_env().report_limit == 10


# =============================================================================
# CLI Tests
# =============================================================================

@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "registry.json"
    path.write_text(json.dumps({
        "base": {},
        "admin": {"extends": "base"},
        "page": {"extends": "admin", "mixins": ["base"]},
    }))
    return path


@pytest.fixture
def cyclic_registry_file(tmp_path):
    path = tmp_path / "cyclic.yaml"
    path.write_text("a: {extends: b}\nb: {extends: a}\n")
    return path


class TestCli:
    """Tests for the depgraph-analyze command."""

    def test_report(self, registry_file, capsys):
        assert main([str(registry_file), "--no-color"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Dependency Analysis Report" in out
        assert "base -> admin -> page" in out

    def test_json_with_chain(self, registry_file, capsys):
        assert main([str(registry_file), "--json", "--chain", "page"]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["topological_order"] == ["base", "admin", "page"]
        assert data["chains"]["page"] == [["base", "admin", "page"], ["base", "page"]]

    def test_exports(self, registry_file, tmp_path):
        out_dir = tmp_path / "out"
        code = main([
            str(registry_file), "--quiet",
            "-o", str(out_dir / "result.json"),
            "--graphml", str(out_dir / "graph.graphml"),
            "--gexf", str(out_dir / "graph.gexf"),
            "--visualization", str(out_dir / "vis.json"),
            "--layout", "hierarchical",
        ])
        assert code == EXIT_OK
        assert (out_dir / "graph.graphml").exists()
        assert (out_dir / "graph.gexf").exists()
        vis = json.loads((out_dir / "vis.json").read_text())
        assert vis["layout"]["algorithm"] == "hierarchical"
        assert len(vis["edges"]) == 3

    def test_resolver_fields(self, tmp_path, capsys):
        path = tmp_path / "registry.json"
        path.write_text(json.dumps({"a": {"needs": ["b"]}, "b": {}}))
        assert main([str(path), "--json", "--resolver-fields", "needs"]) == EXIT_OK
        assert json.loads(capsys.readouterr().out)["topological_order"] == ["b", "a"]

    def test_fail_on_cycles(self, cyclic_registry_file, capsys):
        assert main([str(cyclic_registry_file), "--no-color"]) == EXIT_OK
        assert main([str(cyclic_registry_file), "--quiet", "--fail-on-cycles"]) == EXIT_CYCLES

    def test_fail_on_cycles_with_cycle_count_disabled(self, cyclic_registry_file,
                                                      monkeypatch, capsys):
        monkeypatch.setenv("DEPGRAPH_DETECT_CYCLES", "no")
        code = main([str(cyclic_registry_file), "--fail-on-cycles", "--no-color"])
        out = capsys.readouterr().out
        assert code == EXIT_CYCLES
        assert "Circular dependencies (1)" in out
        assert "No circular dependencies found" not in out

    def test_invalid_report_limit_setting(self, registry_file, monkeypatch, capsys):
        monkeypatch.setenv("DEPGRAPH_REPORT_LIMIT", "lots")
        assert main([str(registry_file)]) == EXIT_ERROR
        assert "Error: DEPGRAPH_REPORT_LIMIT must be an integer" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == EXIT_ERROR
        assert "Error: File not found" in capsys.readouterr().err
