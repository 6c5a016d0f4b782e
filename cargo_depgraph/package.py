"""Graph node data and helpers working on cargo metadata packages."""

from __future__ import annotations

import sys
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

from .dep_info import DepInfo, DepKind

if TYPE_CHECKING:
    from .graph import DepGraph


def is_proc_macro(package: Mapping[str, Any]) -> bool:
    """Whether a metadata package has a proc-macro target."""
    kinds = {kind for target in package.get("targets", ()) for kind in target.get("kind", ())}
    res = "proc-macro" in kinds
    if res and "lib" in kinds:
        print(
            "encountered a crate that is both a regular library and a proc-macro",
            file=sys.stderr,
        )
    return res


@dataclass
class Package:
    """A package node of the dependency graph."""

    name: str
    version: str
    dep_info: DepInfo = field(default_factory=DepInfo)
    is_ws_member: bool = False
    is_proc_macro: bool = False
    name_uses: int = 0

    @staticmethod
    def from_metadata(package: Mapping[str, Any], is_ws_member: bool) -> Package:
        """Create a node from a `cargo metadata` package entry."""
        dep_info = DepInfo()
        proc_macro = is_proc_macro(package)
        if proc_macro:
            dep_info.kind = DepKind.BUILD
        return Package(
            name=package["name"],
            version=package["version"],
            dep_info=dep_info,
            is_ws_member=is_ws_member,
            is_proc_macro=proc_macro,
        )

    def label(self) -> str:
        """The name, followed by the version if the name occurs more than once."""
        if self.name_uses > 1:
            return f"{self.name} {self.version}"
        return self.name


def set_name_stats(graph: DepGraph) -> None:
    """Record for every node how many nodes in the graph share its name."""
    packages = [graph.node(idx) for idx in graph.node_indices()]
    counts = Counter(pkg.name for pkg in packages)
    for pkg in packages:
        pkg.name_uses = counts[pkg.name]