"""
Render module: render contract and Graphviz DOT output.
"""

from factor_graph.render.contract import Shape, Renderable
from factor_graph.render.dot import DotOptions, render_dot, write_dot

__all__ = [
    "Shape",
    "Renderable",
    "DotOptions",
    "render_dot",
    "write_dot",
]
