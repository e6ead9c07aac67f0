#!/usr/bin/env python3
"""
factor_graph: probabilistic factor graphs

Build factor graphs, derive breadth-first spanning trees, and export both
to Graphviz DOT.

Usage:
    # Render a graph described in a JSON file
    python main.py render --input problem.json --output graph.dot

    # Also render the spanning tree rooted at a variable
    python main.py render --input problem.json --output graph.dot --root A --tree-output tree.dot

    # Generate an Ising grid
    python main.py ising --rows 3 --cols 3 --output ising.dot --root X0_0 --tree-output tree.dot

    # Run demos
    python main.py demo --example chain

    # Run tests
    python main.py test
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from factor_graph import (
    FactorGraph,
    FactorGraphError,
    TablePotential,
    build_ising_grid,
    write_dot,
    __version__,
)
from factor_graph.render.dot import DotOptions

logger = logging.getLogger(__name__)


def add_table_factor(graph: FactorGraph, scope, values) -> int:
    """
    Add a table-backed factor, checking the table shape before committing.

    Raises:
        ValueError: If the table shape does not match the scope domains
        UnknownVariable: If a scope variable does not exist
    """
    potential = TablePotential(np.array(values, dtype=np.float64))
    potential.check_scope(graph, scope)
    return graph.add_factor(scope, potential)


def load_problem_from_json(filepath: str) -> FactorGraph:
    """
    Load a factor graph from a JSON file.

    Expected format:
    {
        "variables": {"A": [0, 1], "B": ["lo", "mid", "hi"]},
        "factors": [
            {"scope": ["A", "B"], "values": [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]]}
        ]
    }

    Variables are added in file order, then factors in list order.

    Raises:
        ValueError: If the file does not follow this layout
    """
    with open(filepath, "r") as f:
        data = json.load(f)

    if not isinstance(data, dict) or not isinstance(data.get("variables"), dict):
        raise ValueError(f"{filepath}: 'variables' must be an object mapping names to domains")
    factors = data.get("factors", [])
    if not isinstance(factors, list):
        raise ValueError(f"{filepath}: 'factors' must be a list")

    graph = FactorGraph()
    for name, domain in data["variables"].items():
        if not isinstance(domain, list):
            raise ValueError(f"{filepath}: domain of {name!r} must be a list of values, got {domain!r}")
        graph.add_variable(name, domain)

    for i, fdata in enumerate(factors):
        if not isinstance(fdata, dict) or "scope" not in fdata or "values" not in fdata:
            raise ValueError(f"{filepath}: factor {i} needs 'scope' and 'values'")
        scope = fdata["scope"]
        if not isinstance(scope, list) or not all(isinstance(v, str) for v in scope):
            raise ValueError(f"{filepath}: scope of factor {i} must be a list of variable names")
        add_table_factor(graph, scope, fdata["values"])

    return graph


def export_graph(
    graph: FactorGraph,
    output: Optional[str],
    root: Optional[str],
    tree_output: Optional[str],
) -> None:
    """Write the graph and, if a root is given, its spanning tree."""
    if output:
        write_dot(graph, output)
        print(f"Wrote factor graph to: {output}")

    if root:
        tree = graph.spanning_tree(root)
        print(f"\nSpanning tree from {root}:")
        print(f"  Nodes reached: {len(tree)} of {len(graph)}")
        print(f"  Depth: {max(n.depth for n in tree)}")
        if tree_output:
            write_dot(tree, tree_output, DotOptions(graph_id="spanning_tree"))
            print(f"Wrote spanning tree to: {tree_output}")


def describe(graph: FactorGraph) -> None:
    print(f"\nFactor graph:")
    print(f"  Variables: {graph.num_variables}")
    for var in graph.variables:
        print(f"    {var.name}: domain {list(var.domain)}")
    print(f"  Factors: {graph.num_factors}")
    for fac in graph.factors:
        print(f"    {fac.label} (id {fac.id})")


def cmd_render(args):
    """Execute the render command."""
    try:
        print(f"Loading problem from: {args.input}")
        graph = load_problem_from_json(args.input)
        describe(graph)
        print()
        export_graph(graph, args.output, args.root, args.tree_output)
    except (FactorGraphError, OSError, ValueError, KeyError, TypeError) as e:
        print(f"Error: {e}")
        logger.debug("render failed", exc_info=True)
        return 1
    return 0


def cmd_ising(args):
    """Execute the ising command."""
    try:
        graph = build_ising_grid(
            args.rows,
            args.cols,
            coupling=args.coupling,
            field=args.field,
            periodic=args.periodic,
        )
        print(f"Ising grid {args.rows}x{args.cols}, J = {args.coupling}, h = {args.field}")
        print(f"  {graph!r}")
        print()
        export_graph(graph, args.output, args.root, args.tree_output)
    except (FactorGraphError, OSError, ValueError) as e:
        print(f"Error: {e}")
        logger.debug("ising failed", exc_info=True)
        return 1
    return 0


def _print_tree(tree) -> None:
    for node in tree.nodes:
        kind = "factor" if node.is_factor else "var"
        parent = "-" if node.is_root else node.parent.name
        print(f"  {'  ' * node.depth}{node.name} [{kind}, id {node.source_id}] <- {parent}")


def demo_simple_chain():
    """Demo: Simple chain A -- B -- C"""
    print("=" * 60)
    print("Demo: Simple Chain A -- B -- C")
    print("=" * 60)

    graph = FactorGraph()
    for name in ("A", "B", "C"):
        graph.add_variable(name, [0, 1])

    phi_AB = TablePotential([[0.9, 0.1], [0.2, 0.8]])
    phi_BC = TablePotential([[0.3, 0.7], [0.5, 0.5]])
    graph.add_factor(["A", "B"], phi_AB)
    graph.add_factor(["B", "C"], phi_BC)
    describe(graph)

    tree = graph.spanning_tree("A")
    print("\nSpanning tree from A:")
    _print_tree(tree)

    expected = [0, 3, 1, 4, 2]
    match = tree.source_ids() == expected
    print(f"\nDiscovery order: {tree.source_ids()} (expected {expected})")
    print(f"Match: {match}")

    return match


def demo_grid_2x2():
    """Demo: 2x2 Grid Ising Model"""
    print("=" * 60)
    print("Demo: 2x2 Grid Ising Model")
    print("=" * 60)

    graph = build_ising_grid(2, 2, coupling=0.5)

    print("\nFactor Graph:")
    print("  X0_0 -- X0_1")
    print("   |       |")
    print("  X1_0 -- X1_1")
    describe(graph)

    tree = graph.spanning_tree("X0_0")
    print("\nSpanning tree from X0_0:")
    _print_tree(tree)

    # The 4-cycle leaves exactly one factor-variable edge out of the tree
    n_edges = len(graph.edges())
    n_tree_edges = len(tree.edges())
    match = len(tree) == len(graph) and n_tree_edges == n_edges - 1
    print(f"\nGraph edges: {n_edges}, tree edges: {n_tree_edges}")
    print(f"Match: {match}")

    return match


def cmd_demo(args):
    """Execute the demo command."""
    demos = {
        "chain": demo_simple_chain,
        "grid": demo_grid_2x2,
    }

    if args.example == "all":
        results = []
        for name, func in demos.items():
            try:
                passed = func()
                results.append((name, passed))
            except FactorGraphError as e:
                print(f"Error in {name}: {e}")
                results.append((name, False))
            print()

        print("=" * 60)
        print("Summary")
        print("=" * 60)
        all_passed = True
        for name, passed in results:
            status = "PASS" if passed else "FAIL"
            print(f"  {name}: {status}")
            if not passed:
                all_passed = False

        return 0 if all_passed else 1

    try:
        passed = demos[args.example]()
        return 0 if passed else 1
    except FactorGraphError as e:
        print(f"Error: {e}")
        return 1


def cmd_test(args):
    """Execute the test command."""
    import subprocess

    test_dir = Path(__file__).parent / "tests"
    if not test_dir.exists():
        print(f"Test directory not found: {test_dir}")
        return 1

    cmd = [sys.executable, "-m", "pytest", str(test_dir)]
    if args.pytest_verbose:
        cmd.append("-v")
    if args.coverage:
        cmd.extend(["--cov=factor_graph", "--cov-report=term-missing"])

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def cmd_info(args):
    """Display system information."""
    print(f"factor_graph v{__version__}")
    print("Probabilistic factor graphs with spanning trees and DOT export")
    print()
    print("Node shapes:")
    print("  circle - variable")
    print("  box    - factor")
    print()
    print("Python:", sys.version.split()[0])
    print("NumPy:", np.__version__)

    import networkx
    print("NetworkX:", networkx.__version__)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="factor-graph",
        description="factor_graph: probabilistic factor graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render a graph from JSON, plus the spanning tree rooted at A
  factor-graph render --input problem.json --output graph.dot --root A --tree-output tree.dot

  # Generate a 4x4 periodic Ising grid
  factor-graph ising --rows 4 --cols 4 --periodic --output ising.dot

  # Run demos
  factor-graph demo --example all

  # Run tests
  factor-graph test -v
"""
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"factor_graph {__version__}"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a factor graph from JSON")
    render_parser.add_argument("--input", "-i", type=str, required=True, help="Input JSON file")
    render_parser.add_argument("--output", "-o", type=str, help="Output DOT file for the graph")
    render_parser.add_argument("--root", "-r", type=str, help="Root variable for the spanning tree")
    render_parser.add_argument("--tree-output", "-t", type=str, help="Output DOT file for the spanning tree")

    # Ising command
    ising_parser = subparsers.add_parser("ising", help="Generate an Ising grid model")
    ising_parser.add_argument("--rows", type=int, default=3, help="Grid rows (default: 3)")
    ising_parser.add_argument("--cols", type=int, default=3, help="Grid columns (default: 3)")
    ising_parser.add_argument("--coupling", "-J", type=float, default=1.0, help="Coupling J (default: 1.0)")
    ising_parser.add_argument("--field", "-H", type=float, default=0.0, help="External field h (default: 0.0)")
    ising_parser.add_argument("--periodic", action="store_true", help="Wrap grid edges around")
    ising_parser.add_argument("--output", "-o", type=str, help="Output DOT file for the graph")
    ising_parser.add_argument("--root", "-r", type=str, help="Root variable for the spanning tree")
    ising_parser.add_argument("--tree-output", "-t", type=str, help="Output DOT file for the spanning tree")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demonstration examples")
    demo_parser.add_argument(
        "--example", "-e",
        choices=["chain", "grid", "all"],
        default="all",
        help="Which example to run (default: all)"
    )

    # Test command
    test_parser = subparsers.add_parser("test", help="Run test suite")
    test_parser.add_argument("--verbose", "-v", dest="pytest_verbose", action="store_true", help="Verbose output")
    test_parser.add_argument("--coverage", "-c", action="store_true", help="With coverage")

    # Info command
    subparsers.add_parser("info", help="Show system information")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "render": cmd_render,
        "ising": cmd_ising,
        "demo": cmd_demo,
        "test": cmd_test,
        "info": cmd_info,
    }

    if args.command is None:
        parser.print_help()
        return 0

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
