"""
Example: Simple chain A -- B -- C

Builds the chain, prints the spanning tree rooted at A, and writes both
the graph and the tree as DOT files.
"""

from factor_graph import FactorGraph, TablePotential, write_dot


def main():
    graph = FactorGraph()

    # Binary variables
    graph.add_variable("A", [0, 1])
    graph.add_variable("B", [0, 1])
    graph.add_variable("C", [0, 1])

    # Pairwise factors
    graph.add_factor(["A", "B"], TablePotential([[0.9, 0.1], [0.2, 0.8]]))
    graph.add_factor(["B", "C"], TablePotential([[0.3, 0.7], [0.5, 0.5]]))

    print(graph)
    for nid in graph.all_ids():
        print(f"  {nid}: {graph.label(nid)} ({graph.shape(nid).value})")

    tree = graph.spanning_tree("A")
    print("\nSpanning tree from A:")
    for node in tree:
        indent = "  " * node.depth
        print(f"  {indent}{node.name}")

    write_dot(graph, "chain.dot")
    write_dot(tree, "chain_tree.dot")
    print("\nWrote chain.dot and chain_tree.dot")


if __name__ == "__main__":
    main()
