#!/usr/bin/env python3
"""
Dependency Analysis CLI

Script entry point for running the analyzer from a source checkout.

Usage:
    python bin/analyze_graph.py registry.yaml
    python bin/analyze_graph.py registry.json --chain page/desktop/home
    python bin/analyze_graph.py registry.json --json -o output/analysis.json
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from depgraph.cli import main


if __name__ == "__main__":
    sys.exit(main())
