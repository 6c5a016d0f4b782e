"""Dependency kinds and the data attached to dependency graph edges."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class BuildFlag(enum.Enum):
    """When a dependency gets built: always, only for tests, or never."""

    ALWAYS = "always"
    TEST = "test"
    NEVER = "never"

    def __and__(self, other: BuildFlag) -> BuildFlag:
        if not isinstance(other, BuildFlag):
            return NotImplemented
        if self is BuildFlag.ALWAYS and other is BuildFlag.ALWAYS:
            return BuildFlag.ALWAYS
        if BuildFlag.NEVER in (self, other):
            return BuildFlag.NEVER
        return BuildFlag.TEST

    def __or__(self, other: BuildFlag) -> BuildFlag:
        if not isinstance(other, BuildFlag):
            return NotImplemented
        if self is BuildFlag.NEVER and other is BuildFlag.NEVER:
            return BuildFlag.NEVER
        if BuildFlag.ALWAYS in (self, other):
            return BuildFlag.ALWAYS
        return BuildFlag.TEST


class DependencyKind(enum.Enum):
    """Dependency kind as reported by `cargo metadata`."""

    NORMAL = "normal"
    BUILD = "build"
    DEVELOPMENT = "dev"
    UNKNOWN = "unknown"

    @staticmethod
    def from_metadata(value: str | None) -> DependencyKind:
        """Map the `kind` field of cargo metadata (null for normal) to a kind."""
        if value is None or value == "normal":
            return DependencyKind.NORMAL
        if value == "build":
            return DependencyKind.BUILD
        if value == "dev":
            return DependencyKind.DEVELOPMENT
        return DependencyKind.UNKNOWN


@dataclass(frozen=True)
class DepKind:
    """How a dependency is built for the host and for the target."""

    host: BuildFlag
    target: BuildFlag

    def combine_incoming(self, other: DepKind) -> DepKind:
        """Merge the kinds of two incoming edges."""
        if self == DepKind.UNKNOWN or other == DepKind.UNKNOWN:
            return DepKind.UNKNOWN
        return DepKind(self.host | other.host, self.target | other.target)

    def update_outgoing(self, node_kind: DepKind) -> DepKind:
        """Restrict an outgoing edge's kind by the kind of its source node."""
        if node_kind == DepKind.UNKNOWN or self == DepKind.UNKNOWN:
            return self
        host = (
            (self.target & node_kind.host)
            | (self.host & node_kind.target)
            | (self.host & node_kind.host)
        )
        return DepKind(host, self.target & node_kind.target)

    def is_dev_only(self) -> bool:
        return self.host is not BuildFlag.ALWAYS and self.target is not BuildFlag.ALWAYS


DepKind.NORMAL = DepKind(BuildFlag.NEVER, BuildFlag.ALWAYS)
DepKind.BUILD = DepKind(BuildFlag.ALWAYS, BuildFlag.NEVER)
DepKind.DEV = DepKind(BuildFlag.NEVER, BuildFlag.TEST)
# also covers dev-dependencies of build-dependencies
DepKind.BUILD_OF_DEV = DepKind(BuildFlag.TEST, BuildFlag.NEVER)
DepKind.NORMAL_AND_BUILD = DepKind(BuildFlag.ALWAYS, BuildFlag.ALWAYS)
DepKind.DEV_AND_BUILD = DepKind(BuildFlag.ALWAYS, BuildFlag.TEST)
DepKind.NORMAL_AND_BUILD_OF_DEV = DepKind(BuildFlag.TEST, BuildFlag.ALWAYS)
DepKind.DEV_AND_BUILD_OF_DEV = DepKind(BuildFlag.TEST, BuildFlag.TEST)
DepKind.UNKNOWN = DepKind(BuildFlag.NEVER, BuildFlag.NEVER)

_KIND_MAP = {
    DependencyKind.NORMAL: DepKind.NORMAL,
    DependencyKind.BUILD: DepKind.BUILD,
    DependencyKind.DEVELOPMENT: DepKind.DEV,
    DependencyKind.UNKNOWN: DepKind.UNKNOWN,
}


def dep_kind_for(kind: DependencyKind, proc_macro: bool) -> DepKind:
    """The DepKind of an edge of the given metadata kind; proc-macros run on the host."""
    res = _KIND_MAP[kind]
    if proc_macro:
        return DepKind(res.target, BuildFlag.NEVER)
    return res


@dataclass
class DepInfo:
    """Data attached to an edge (and, once resolved, to a node) of the graph."""

    kind: DepKind = field(default_factory=lambda: DepKind.NORMAL)
    is_target_dep: bool = False
    # whether this dependency could be removed by deactivating a cargo feature
    is_optional: bool = False
    # if optional, whether it is optional directly rather than transitively
    is_optional_direct: bool = False
    # whether update_dep_info has already processed this edge
    visited: bool = False