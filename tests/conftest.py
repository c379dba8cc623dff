"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the depgraph test suite.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "cycle"         # Run only cycle tests
    pytest tests/ --quick            # Skip slow tests
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from depgraph.core.graph_model import DependencyGraph


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Helpers
# =============================================================================

def deps_resolver(metadata: Dict[str, Any]) -> List[str]:
    """Resolver for fixtures that store dependency IDs under 'deps'"""
    return metadata.get("deps", [])


def assert_bidirectional(graph: DependencyGraph) -> None:
    """B in A.dependencies <=> A in B.dependents, for every pair"""
    for node_id, node in graph.nodes.items():
        for dep_id in node.dependencies:
            assert node_id in graph.nodes[dep_id].dependents
        for dependent_id in node.dependents:
            assert node_id in graph.nodes[dependent_id].dependencies
    assert graph.check_consistency() == []


def assert_edge_counts(graph: DependencyGraph) -> None:
    outgoing = sum(len(n.dependencies) for n in graph.nodes.values())
    incoming = sum(len(n.dependents) for n in graph.nodes.values())
    assert outgoing == graph.edge_count == incoming


@pytest.fixture
def resolver():
    return deps_resolver


# =============================================================================
# Registry Fixtures
# =============================================================================

@pytest.fixture
def linear_registry() -> Dict[str, Any]:
    """A <- B <- C"""
    return {
        "A": {"deps": []},
        "B": {"deps": ["A"]},
        "C": {"deps": ["B"]},
    }


@pytest.fixture
def mutual_registry() -> Dict[str, Any]:
    """A <-> B"""
    return {
        "A": {"deps": ["B"]},
        "B": {"deps": ["A"]},
    }


@pytest.fixture
def diamond_registry() -> Dict[str, Any]:
    """
    Diamond with a shortcut:

        base <- left  <- top
        base <- right <- top
        base <------------ mid <- top
        solo (no edges)
    """
    return {
        "base": {"deps": []},
        "left": {"deps": ["base"]},
        "right": {"deps": ["base"]},
        "mid": {"deps": ["base", "left"]},
        "top": {"deps": ["left", "right", "mid"]},
        "solo": {"deps": []},
    }


@pytest.fixture
def template_records() -> List[Dict[str, Any]]:
    """Template metadata records keyed by category/device/name"""
    return [
        {"category": "layout", "device": "desktop", "name": "base", "displayName": "Base Layout"},
        {"category": "mixin", "device": "desktop", "name": "theme"},
        {
            "category": "layout", "device": "desktop", "name": "admin",
            "extends": "layout/desktop/base",
            "mixins": ["mixin/desktop/theme"],
        },
        {
            "category": "page", "device": "desktop", "name": "dashboard",
            "extends": "layout/desktop/admin",
            "dependencies": ["widget/desktop/missing"],
        },
    ]
