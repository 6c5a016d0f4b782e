# cargo-depgraph

Creates dependency graphs for cargo projects. It runs `cargo metadata`,
builds the graph of packages and prints it in Graphviz `dot` format on
standard output.

## Installation

```sh
pip install .
```

`cargo` must be available on your `PATH`. If the `CARGO` environment
variable is set, that program is run instead of `cargo`.

## Usage

Run it from inside a cargo project (or pass `--manifest-path`). The command
takes the form of a cargo subcommand, so the first argument is `depgraph`:

```sh
cargo-depgraph depgraph | dot -Tpng > graph.png
```

Because the installed script is named `cargo-depgraph`, cargo also finds it
when it is on your `PATH`, so `cargo depgraph` works the same way:

```sh
cargo depgraph --all-deps | dot -Tsvg > graph.svg
```

Print the version:

```sh
cargo-depgraph --version
```

If `cargo metadata` cannot be run, fails, or produces no usable output, an
`Error: ...` message is printed on standard error and the exit status is 1.

### Options

Graph selection:

- `--all-deps` – shorthand for `--build-deps --dev-deps --target-deps`
- `--build-deps` – include build-dependencies (and proc-macro crates)
- `--dev-deps` – include dev-dependencies
- `--target-deps` – include `cfg()` dependencies
- `--dedup-transitive-deps` – remove a direct edge when its target can also
  be reached through another package
- `--hide NAMES` – hide packages, and whatever is then left without incoming
  edges; they still take part in dependency kind resolution
- `--exclude NAMES` – ignore packages entirely
- `--include NAMES` – show only these packages
- `--root NAMES` – workspace packages to list dependencies for (default: all)
- `--workspace-only` – drop every package outside the workspace
- `--focus NAMES` – keep only these packages, the workspace members that
  depend on them and everything in between
- `--depth N` – limit the depth of the graph (a non-negative integer)

`NAMES` may be a comma-separated list, and the option may be repeated.

Passed through to `cargo metadata`:

- `--features FEATURES`, `--all-features`, `--no-default-features`
- `--filter-platform TRIPLE`
- `--manifest-path PATH`
- `--frozen`, `--locked`, `--offline`
- `-Z FLAG`

## Reading the graph

- Workspace members are drawn as boxes.
- Edge and node colours show the dependency kind: default colour for normal,
  blue for dev, green3 for build, turquoise3 for build-of-dev, darkgreen for
  normal and build, darkviolet for dev and build, turquoise4 for normal and
  build-of-dev, steelblue for dev and build-of-dev, red for unknown.
- Target-specific (`cfg()`) packages are filled light grey; target-specific
  edges get an empty arrowhead.
- Optional packages are dashed. Edges that are optional directly are dotted,
  edges that are optional only through an optional parent are dashed.
- When several packages share a name, the version is shown next to it.

## Library use

The pieces are usable from Python as well:

- `cargo_depgraph.main.load_metadata(config)` runs `cargo metadata` and
  returns the parsed JSON; `metadata_args(config)` gives the arguments used.
- `cargo_depgraph.config.parse_options(argv)` turns command-line arguments
  into a `Config`.
- `cargo_depgraph.build.get_dep_graph(metadata, config)` turns parsed
  metadata into a `cargo_depgraph.graph.DepGraph`, raising `MetadataError`
  when the metadata is missing or inconsistent.
- `update_dep_info`, `remove_irrelevant_deps`, `remove_deps` and
  `dedup_transitive_deps` in `cargo_depgraph.graph` transform the graph, and
  `cargo_depgraph.package.set_name_stats` records which names occur more
  than once.
- `cargo_depgraph.output.dot(graph)` renders it as a dot document.

## What it does not do

It does not draw images itself: it only writes `dot` text, and rendering
needs Graphviz installed separately. It does not read `Cargo.toml` or
`Cargo.lock` directly; all information comes from `cargo metadata`.