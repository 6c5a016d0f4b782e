"""Construction of the dependency graph from `cargo metadata` output."""

from __future__ import annotations

import sys
from collections import deque
from typing import Any, Mapping

from .config import Config
from .dep_info import DepInfo, DependencyKind, dep_kind_for
from .graph import DepGraph
from .package import Package, is_proc_macro


class MetadataError(Exception):
    """The metadata reported by cargo is missing or inconsistent."""


def skip_dep(config: Config, info: Mapping[str, Any]) -> bool:
    """Whether a `dep_kinds` entry of a resolve dependency is disabled by the config."""
    kind = DependencyKind.from_metadata(info.get("kind"))
    return (
        (not config.build_deps and kind is DependencyKind.BUILD)
        or (not config.dev_deps and kind is DependencyKind.DEVELOPMENT)
        or (not config.target_deps and info.get("target") is not None)
    )


def get_dep_graph(metadata: Mapping[str, Any], config: Config) -> DepGraph:
    """Build the graph of workspace members and their (filtered) dependencies."""
    resolve = metadata.get("resolve")
    if resolve is None:
        raise MetadataError(
            "Couldn't obtain dependency graph. Your cargo version may be too old."
        )

    packages = {pkg["id"]: pkg for pkg in metadata.get("packages", ())}
    resolve_nodes = {node["id"]: node for node in resolve.get("nodes", ())}
    members = list(metadata.get("workspace_members", ()))
    member_set = set(members)

    def get_package(pkg_id: str) -> Mapping[str, Any]:
        try:
            return packages[pkg_id]
        except KeyError:
            raise MetadataError(f"package {pkg_id} not found in metadata") from None

    graph = DepGraph()
    node_indices: dict[str, int] = {}
    queue: deque[tuple[str, int]] = deque()

    for pkg_id in members:
        pkg = get_package(pkg_id)
        name = pkg["name"]
        if (
            (config.root and name not in config.root)
            or name in config.exclude
            or (config.include and name not in config.include)
            or (not config.build_deps and is_proc_macro(pkg))
        ):
            continue
        if pkg_id in node_indices:
            raise MetadataError(f"workspace member {pkg_id} listed twice")
        node_indices[pkg_id] = graph.add_node(Package.from_metadata(pkg, True))
        queue.append((pkg_id, 0))

    while queue:
        pkg_id, depth = queue.popleft()
        pkg = get_package(pkg_id)
        parent_idx = node_indices[pkg_id]
        resolve_node = resolve_nodes.get(pkg_id)
        if resolve_node is None:
            raise MetadataError("package not found in resolve")

        for dep in resolve_node.get("deps", ()):
            dep_id = dep["pkg"]
            dep_kinds = dep.get("dep_kinds", ())
            # differs from dep["name"] when renamed in the parent's manifest
            dep_crate_name = get_package(dep_id)["name"]

            if (
                dep_crate_name in config.exclude
                or (config.include and dep_crate_name not in config.include)
                or all(skip_dep(config, info) for info in dep_kinds)
            ):
                continue

            child_idx = node_indices.get(dep_id)
            if child_idx is None:
                is_member = dep_id in member_set
                if config.workspace_only and not is_member:
                    continue
                if config.depth is not None and depth >= config.depth:
                    continue
                child = Package.from_metadata(get_package(dep_id), is_member)
                # cargo doesn't report proc-macros as build dependencies, though they are
                if not config.build_deps and child.is_proc_macro:
                    continue
                child_idx = graph.add_node(child)
                queue.append((dep_id, depth + 1))
                node_indices[dep_id] = child_idx

            child_is_proc_macro = graph.node(child_idx).is_proc_macro

            for info in dep_kinds:
                kind = DependencyKind.from_metadata(info.get("kind"))
                target = info.get("target")
                extra = next(
                    (
                        d
                        for d in pkg.get("dependencies", ())
                        if d.get("name") == dep_crate_name
                        and DependencyKind.from_metadata(d.get("kind")) is kind
                        and d.get("target") == target
                    ),
                    None,
                )
                if extra is None:
                    print(
                        f"dependency {dep_crate_name} of {pkg['name']} not found in packages "
                        "=> dependencies, this should never happen!",
                        file=sys.stderr,
                    )
                    optional = False
                else:
                    optional = bool(extra.get("optional", False))

                # several edges may lead from A to B; some may still have to be skipped
                if skip_dep(config, info):
                    continue

                graph.add_edge(
                    parent_idx,
                    child_idx,
                    DepInfo(
                        kind=dep_kind_for(kind, child_is_proc_macro),
                        is_target_dep=target is not None,
                        is_optional=optional,
                        is_optional_direct=optional,
                    ),
                )

    return graph