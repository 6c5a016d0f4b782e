"""Command-line options of the `cargo depgraph` subcommand."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Sequence

_VERSION = "1.6.0"
_U32_MAX = 2**32 - 1


@dataclass
class Config:
    """Options that control how the dependency graph is built and shown."""

    build_deps: bool = False
    dev_deps: bool = False
    target_deps: bool = False
    dedup_transitive_deps: bool = False
    hide: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    root: list[str] = field(default_factory=list)
    workspace_only: bool = False
    focus: list[str] = field(default_factory=list)
    depth: int | None = None

    features: list[str] = field(default_factory=list)
    all_features: bool = False
    no_default_features: bool = False
    filter_platform: list[str] = field(default_factory=list)
    manifest_path: str | None = None
    frozen: bool = False
    locked: bool = False
    offline: bool = False
    unstable_flags: list[str] = field(default_factory=list)


def _comma_list(value: str) -> list[str]:
    return value.split(",")


def _u32(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid digit found in string: {value!r}") from None
    if not 0 <= number <= _U32_MAX:
        raise argparse.ArgumentTypeError(f"{value} is not in 0..={_U32_MAX}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """The parser for `cargo depgraph [OPTIONS]`."""
    parser = argparse.ArgumentParser(prog="cargo")
    parser.add_argument("--version", action="version", version=f"cargo-depgraph {_VERSION}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    sub = subparsers.add_parser("depgraph")

    def flag(name: str, help_text: str) -> None:
        sub.add_argument(name, action="store_true", help=help_text)

    def name_list(name: str, help_text: str) -> None:
        sub.add_argument(name, action="extend", type=_comma_list, default=[], help=help_text)

    flag(
        "--all-deps",
        "Include all dependencies in the graph "
        "(shorthand for --build-deps --dev-deps --target-deps)",
    )
    flag("--build-deps", "Include build-dependencies in the graph")
    flag("--dev-deps", "Include dev-dependencies in the graph")
    flag("--target-deps", "Include cfg() dependencies in the graph")
    flag(
        "--dedup-transitive-deps",
        "Remove direct dependency edges where there's at least one transitive "
        "dependency of the same kind.",
    )
    name_list(
        "--hide",
        "Package name(s) to hide; can be given as a comma-separated list or as multiple "
        "arguments. In contrast to --exclude, hidden packages will still contribute in "
        "dependency kind resolution",
    )
    name_list(
        "--exclude",
        "Package name(s) to ignore; can be given as a comma-separated list or as multiple "
        "arguments. In contrast to --hide, excluded packages will not contribute in "
        "dependency kind resolution",
    )
    name_list(
        "--include",
        "Package name(s) to include; can be given as a comma-separated list or as multiple "
        "arguments. Only included packages will be shown",
    )
    name_list("--root", "Workspace package(s) to list dependencies for. Default: all")
    flag("--workspace-only", "Exclude all packages outside of the workspace")
    name_list(
        "--focus",
        "Package name(s) to focus on: only the given packages, the workspace members that "
        "depend on them and any intermediate dependencies are going to be present in the "
        "output; can be given as a comma-separated list or as multiple arguments",
    )
    sub.add_argument("--depth", type=_u32, help="Limit the depth of the dependency graph")

    sub.add_argument(
        "--features", action="append", default=[], metavar="FEATURES",
        help="List of features to activate",
    )
    flag("--all-features", "Activate all available features")
    flag("--no-default-features", "Do not activate the `default` feature")
    sub.add_argument(
        "--filter-platform", action="append", default=[], metavar="TRIPLE",
        help="Only include resolve dependencies matching the given target-triple",
    )
    sub.add_argument("--manifest-path", metavar="PATH", help="Path to Cargo.toml")
    flag("--frozen", "Require Cargo.lock and cache are up to date")
    flag("--locked", "Require Cargo.lock is up to date")
    flag("--offline", "Run without accessing the network")
    sub.add_argument(
        "-Z", dest="unstable_flags", action="append", default=[], metavar="FLAG",
        help="Unstable (nightly-only) flags to Cargo, see 'cargo -Z help' for details",
    )
    return parser


def parse_options(argv: Sequence[str] | None = None) -> Config:
    """Parse `depgraph [OPTIONS]` arguments into a Config."""
    ns = build_parser().parse_args(argv)
    all_deps = ns.all_deps
    return Config(
        build_deps=all_deps or ns.build_deps,
        dev_deps=all_deps or ns.dev_deps,
        target_deps=all_deps or ns.target_deps,
        dedup_transitive_deps=ns.dedup_transitive_deps,
        hide=list(ns.hide),
        exclude=list(ns.exclude),
        include=list(ns.include),
        root=list(ns.root),
        workspace_only=ns.workspace_only,
        focus=list(ns.focus),
        depth=ns.depth,
        features=list(ns.features),
        all_features=ns.all_features,
        no_default_features=ns.no_default_features,
        filter_platform=list(ns.filter_platform),
        manifest_path=ns.manifest_path,
        frozen=ns.frozen,
        locked=ns.locked,
        offline=ns.offline,
        unstable_flags=list(ns.unstable_flags),
    )