"""
factor_graph/render/dot.py

Graphviz DOT output for anything implementing the render contract.

Variables are drawn as circles, factors as boxes, and edges carry no
arrowheads unless asked for.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Optional, Union

from factor_graph.render.contract import Renderable

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
RANKDIRS = ("TB", "BT", "LR", "RL")


@dataclass(frozen=True)
class DotOptions:
    """
    DOT rendering options.

    Attributes:
        graph_id: Name after the ``digraph``/``graph`` keyword
        node_prefix: Prefix for node identifiers (``N0``, ``N1``, ...)
        directed: Emit ``digraph`` with ``->`` edges, else ``graph`` with ``--``
        arrowheads: Keep arrowheads on directed edges
        rankdir: Optional layout direction ("TB", "LR", ...)
    """
    graph_id: str = "factor_graph"
    node_prefix: str = "N"
    directed: bool = True
    arrowheads: bool = False
    rankdir: Optional[str] = None

    def __post_init__(self):
        # Node ids are emitted unquoted as prefix + integer id
        if not _ID_RE.match(self.node_prefix):
            raise ValueError(f"node_prefix must be a DOT identifier, got {self.node_prefix!r}")
        if self.rankdir is not None and self.rankdir not in RANKDIRS:
            raise ValueError(f"rankdir must be one of {RANKDIRS}, got {self.rankdir!r}")


def _esc(s: str) -> str:
    return s.replace("\\", "\\\\").replace('"', '\\"')


def render_dot(item: Renderable, options: Optional[DotOptions] = None) -> str:
    """
    Render a graph or spanning tree as DOT text.

    Args:
        item: Object implementing the render contract
        options: Rendering options (defaults if None)

    Returns:
        DOT source, newline terminated
    """
    opts = options or DotOptions()
    keyword, op = ("digraph", "->") if opts.directed else ("graph", "--")

    lines: List[str] = [f'{keyword} "{_esc(opts.graph_id)}" {{']
    if opts.rankdir:
        lines.append(f"    rankdir={opts.rankdir};")

    for nid in sorted(item.node_ids()):
        label = _esc(item.label(nid))
        shape = item.shape(nid).value
        lines.append(f'    {opts.node_prefix}{nid} [label="{label}"][shape="{shape}"];')

    edge_attr = "" if (opts.arrowheads or not opts.directed) else '[arrowhead="none"]'
    for src, dst in item.edges():
        lines.append(f"    {opts.node_prefix}{src} {op} {opts.node_prefix}{dst}{edge_attr};")

    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(
    item: Renderable,
    output: Union[str, Path, IO[str]],
    options: Optional[DotOptions] = None,
) -> None:
    """
    Write DOT text to a path or an open text stream.

    Args:
        item: Object implementing the render contract
        output: File path, or a writable text stream
        options: Rendering options (defaults if None)
    """
    text = render_dot(item, options)
    if isinstance(output, (str, Path)):
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        logger.debug(f"Wrote {len(item.node_ids())} nodes to {output}")
    else:
        output.write(text)
