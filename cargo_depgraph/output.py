"""Rendering of the dependency graph in graphviz dot format."""

from __future__ import annotations

from .dep_info import DepInfo, DepKind
from .graph import DepGraph
from .package import Package

_INDENT = "    "

_KIND_ATTRS: dict[DepKind, str | None] = {
    DepKind.NORMAL: None,
    DepKind.DEV: "color = blue",
    DepKind.BUILD: "color = green3",
    DepKind.BUILD_OF_DEV: "color = turquoise3",
    DepKind.NORMAL_AND_BUILD: "color = darkgreen",
    DepKind.DEV_AND_BUILD: "color = darkviolet",
    DepKind.NORMAL_AND_BUILD_OF_DEV: "color = turquoise4",
    DepKind.DEV_AND_BUILD_OF_DEV: "color = steelblue",
    DepKind.UNKNOWN: "color = red",
}


def attr_for_dep_kind(kind: DepKind) -> str | None:
    """The colour attribute for a dependency kind, or None for normal ones."""
    return _KIND_ATTRS[kind]


def edge_attrs(info: DepInfo) -> str:
    attrs = []
    kind_attr = attr_for_dep_kind(info.kind)
    if kind_attr is not None:
        attrs.append(kind_attr)
    if info.is_target_dep:
        attrs += ["arrowType = empty", "fillcolor = lightgrey"]
    if info.is_optional_direct:
        attrs.append("style = dotted")
    elif info.is_optional:
        attrs.append("style = dashed")
    return ", ".join(attrs)


def node_attrs(package: Package) -> str:
    attrs = []
    if package.is_ws_member:
        attrs.append("shape = box")
    kind_attr = attr_for_dep_kind(package.dep_info.kind)
    if kind_attr is not None:
        attrs.append(kind_attr)
    target, optional = package.dep_info.is_target_dep, package.dep_info.is_optional
    if target and optional:
        attrs += ['style = "dashed,filled"', "fillcolor = lightgrey"]
    elif target:
        attrs += ["style = filled", "fillcolor = lightgrey"]
    elif optional:
        attrs.append("style = dashed")
    return ", ".join(attrs)


def _escape(text: str) -> str:
    return "".join(
        "\\l" if c == "\n" else "\\" + c if c in '"\\' else c for c in text
    )


def dot(graph: DepGraph) -> str:
    """Render the graph as a dot document."""
    lines = ["digraph {"]
    for idx in graph.node_indices():
        package = graph.node(idx)
        lines.append(
            f'{_INDENT}{idx} [ label = "{_escape(package.label())}" {node_attrs(package)}]'
        )
    for edge_idx in graph.edge_indices():
        source, target = graph.edge_endpoints(edge_idx)
        lines.append(f"{_INDENT}{source} -> {target} [ {edge_attrs(graph.edge(edge_idx))}]")
    lines.append("}")
    return "\n".join(lines) + "\n"