"""Entry point: run `cargo metadata`, build the graph and print it as dot."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from typing import Any, Sequence

from .build import MetadataError, get_dep_graph
from .config import Config, parse_options
from .graph import dedup_transitive_deps, remove_deps, remove_irrelevant_deps, update_dep_info
from .output import dot
from .package import set_name_stats


def metadata_args(config: Config) -> list[str]:
    """Arguments passed to cargo to obtain the metadata for this config."""
    args = ["metadata", "--format-version", "1"]
    if config.manifest_path is not None:
        args += ["--manifest-path", config.manifest_path]
    for feature in config.features:
        args += ["--features", feature]
    if config.all_features:
        args.append("--all-features")
    if config.no_default_features:
        args.append("--no-default-features")
    for platform in config.filter_platform:
        args += ["--filter-platform", platform]
    if config.frozen:
        args.append("--frozen")
    if config.locked:
        args.append("--locked")
    if config.offline:
        args.append("--offline")
    for flag in config.unstable_flags:
        args += ["-Z", flag]
    return args


def load_metadata(config: Config) -> dict[str, Any]:
    """Run `cargo metadata` and return its parsed JSON output."""
    cargo = os.environ.get("CARGO", "cargo")
    try:
        result = subprocess.run(
            [cargo, *metadata_args(config)], capture_output=True, text=True
        )
    except OSError as exc:
        raise MetadataError(f"failed to start `{cargo} metadata`: {exc}") from exc
    if result.returncode != 0:
        raise MetadataError(f"`cargo metadata` exited with an error: {result.stderr.strip()}")
    line = next((ln for ln in result.stdout.splitlines() if ln.startswith("{")), None)
    if line is None:
        raise MetadataError("`cargo metadata` produced no JSON output")
    try:
        return json.loads(line)
    except json.JSONDecodeError as exc:
        raise MetadataError(f"invalid `cargo metadata` output: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> int:
    config = parse_options(argv)
    try:
        metadata = load_metadata(config)
        graph = get_dep_graph(metadata, config)
        update_dep_info(graph)
    except (MetadataError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if config.focus:
        remove_irrelevant_deps(graph, config.focus)
    if config.hide:
        remove_deps(graph, config.hide)
    if config.dedup_transitive_deps:
        dedup_transitive_deps(graph)
    set_name_stats(graph)
    print(dot(graph))
    return 0


if __name__ == "__main__":
    sys.exit(main())