"""
Display Module

Text report for dependency analysis results.

Provides:
    - Colors: ANSI terminal color codes
    - format_report: statistics, cycles, resolver failures and the head of
      the load order as plain or colorized text
    - print_report: the same, written to stdout
"""

from __future__ import annotations

from typing import List

from ..core.graph_model import DependencyAnalysisResult


# =============================================================================
# Terminal Colors
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: str, bold: bool = False, enabled: bool = True) -> str:
    """Apply color to text."""
    if not enabled:
        return text
    style = Colors.BOLD if bold else ""
    return f"{style}{color}{text}{Colors.RESET}"


# =============================================================================
# Report
# =============================================================================

def format_report(result: DependencyAnalysisResult, order_limit: int = 10,
                  color: bool = False) -> str:
    """
    Render an analysis result as text.

    Args:
        result: Analysis result to render
        order_limit: Number of load-order entries to show
        color: Emit ANSI colors
    """
    stats = result.statistics
    lines: List[str] = [colored("Dependency Analysis Report", Colors.CYAN, bold=True, enabled=color)]
    lines.append("=" * 60)

    lines.append(colored("Statistics", Colors.BLUE, bold=True, enabled=color))
    lines.append(f"  Total entities:          {stats.total_nodes}")
    lines.append(f"  With dependencies:       {stats.nodes_with_dependencies}")
    lines.append(f"  Depended upon:           {stats.nodes_with_dependents}")
    lines.append(f"  Isolated:                {stats.isolated_nodes}")
    lines.append(f"  Total dependencies:      {stats.total_edges}")
    lines.append(f"  Average dependencies:    {stats.average_dependencies:.2f}")
    lines.append(f"  Max depth:               {stats.max_depth}")
    lines.append("")

    if result.cycles:
        lines.append(colored(f"Circular dependencies ({len(result.cycles)})", Colors.RED,
                             bold=True, enabled=color))
        for i, cycle in enumerate(result.cycles, 1):
            lines.append(f"  {i}. {' -> '.join(cycle.cycle)}")
    else:
        lines.append(colored("No circular dependencies found", Colors.GREEN, enabled=color))
    lines.append("")

    failures = result.failures
    if failures:
        lines.append(colored(f"Resolver failures ({len(failures)})", Colors.YELLOW,
                             bold=True, enabled=color))
        for diagnostic in failures:
            lines.append(f"  - {diagnostic.entity_id}: {diagnostic.message}")
        lines.append("")

    order = result.topological_order
    if order:
        lines.append(colored("Load order", Colors.BLUE, bold=True, enabled=color))
        lines.append("  " + " -> ".join(order[:order_limit]))
        if len(order) > order_limit:
            lines.append(f"  ... ({len(order) - order_limit} more)")
    elif order is None:
        lines.append(colored("Load order unavailable: graph contains cycles", Colors.YELLOW,
                             enabled=color))

    return "\n".join(lines)


def print_report(result: DependencyAnalysisResult, order_limit: int = 10,
                 color: bool = True) -> None:
    print(format_report(result, order_limit=order_limit, color=color))
