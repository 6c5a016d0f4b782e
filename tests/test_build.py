import pytest

from cargo_depgraph.build import MetadataError, get_dep_graph, skip_dep
from cargo_depgraph.config import Config
from cargo_depgraph.dep_info import DepKind, dep_kind_for, DependencyKind


def _id(name):
    return f"{name} 1.0.0 (path+file:///ws/{name})"


def make_metadata(spec, members, resolve=True):
    """spec maps name -> {"deps": [(dep, kind, target, optional)], "targets": [...]}."""
    packages, nodes = [], []
    for name, info in spec.items():
        deps = info.get("deps", [])
        packages.append(
            {
                "id": _id(name),
                "name": name,
                "version": "1.0.0",
                "dependencies": [
                    {"name": d, "kind": k, "target": t, "optional": o} for d, k, t, o in deps
                ],
                "targets": [{"kind": list(info.get("targets", ["lib"]))}],
            }
        )
        grouped = {}
        for d, k, t, _ in deps:
            grouped.setdefault(d, []).append({"kind": k, "target": t})
        nodes.append(
            {
                "id": _id(name),
                "deps": [{"name": d, "pkg": _id(d), "dep_kinds": dk} for d, dk in grouped.items()],
            }
        )
    return {
        "packages": packages,
        "workspace_members": [_id(m) for m in members],
        "resolve": {"nodes": nodes} if resolve else None,
    }


def names(graph):
    return sorted(graph.node(i).name for i in graph.node_indices())


def edges(graph):
    result = {}
    for e in graph.edge_indices():
        s, t = graph.edge_endpoints(e)
        result.setdefault((graph.node(s).name, graph.node(t).name), []).append(graph.edge(e))
    return result


SIMPLE = {
    "app": {"deps": [("serde", None, None, False), ("cc", "build", None, False),
                     ("tester", "dev", None, False)]},
    "serde": {},
    "cc": {},
    "tester": {},
}


def test_skip_dep():
    config = Config()
    assert skip_dep(config, {"kind": None, "target": None}) is False
    assert skip_dep(config, {"kind": "build", "target": None}) is True
    assert skip_dep(config, {"kind": "dev", "target": None}) is True
    assert skip_dep(config, {"kind": None, "target": "cfg(unix)"}) is True
    full = Config(build_deps=True, dev_deps=True, target_deps=True)
    assert skip_dep(full, {"kind": "build", "target": "cfg(unix)"}) is False


def test_default_graph_has_normal_deps_only():
    graph = get_dep_graph(make_metadata(SIMPLE, ["app"]), Config())
    assert names(graph) == ["app", "serde"]
    (info,) = edges(graph)[("app", "serde")]
    assert info.kind == DepKind.NORMAL
    assert info.is_target_dep is False


def test_workspace_member_flag():
    graph = get_dep_graph(make_metadata(SIMPLE, ["app"]), Config())
    flags = {graph.node(i).name: graph.node(i).is_ws_member for i in graph.node_indices()}
    assert flags == {"app": True, "serde": False}


def test_all_kinds_included():
    config = Config(build_deps=True, dev_deps=True)
    graph = get_dep_graph(make_metadata(SIMPLE, ["app"]), config)
    assert names(graph) == ["app", "cc", "serde", "tester"]
    found = edges(graph)
    assert found[("app", "cc")][0].kind == DepKind.BUILD
    assert found[("app", "tester")][0].kind == DepKind.DEV


def test_target_dep():
    spec = {"app": {"deps": [("libc", None, "cfg(unix)", False)]}, "libc": {}}
    assert names(get_dep_graph(make_metadata(spec, ["app"]), Config())) == ["app"]
    graph = get_dep_graph(make_metadata(spec, ["app"]), Config(target_deps=True))
    (info,) = edges(graph)[("app", "libc")]
    assert info.is_target_dep is True


def test_optional_dep():
    spec = {"app": {"deps": [("opt", None, None, True)]}, "opt": {}}
    graph = get_dep_graph(make_metadata(spec, ["app"]), Config())
    (info,) = edges(graph)[("app", "opt")]
    assert info.is_optional and info.is_optional_direct


def test_multiple_kinds_between_same_packages():
    spec = {"app": {"deps": [("x", None, None, False), ("x", "dev", None, True)]}, "x": {}}
    graph = get_dep_graph(make_metadata(spec, ["app"]), Config(dev_deps=True))
    infos = edges(graph)[("app", "x")]
    assert sorted((i.kind == DepKind.DEV, i.is_optional) for i in infos) == [
        (False, False), (True, True)
    ]
    only_normal = get_dep_graph(make_metadata(spec, ["app"]), Config())
    assert len(edges(only_normal)[("app", "x")]) == 1


def test_exclude_and_include():
    meta = make_metadata(SIMPLE, ["app"])
    assert names(get_dep_graph(meta, Config(exclude=["serde"]))) == ["app"]
    assert names(get_dep_graph(meta, Config(exclude=["app"]))) == []
    assert names(get_dep_graph(meta, Config(include=["app"]))) == ["app"]


def test_root_selects_members():
    spec = {"a": {"deps": [("x", None, None, False)]}, "b": {"deps": [("y", None, None, False)]},
            "x": {}, "y": {}}
    graph = get_dep_graph(make_metadata(spec, ["a", "b"]), Config(root=["b"]))
    assert names(graph) == ["b", "y"]


def test_workspace_only():
    spec = {"app": {"deps": [("lib", None, None, False), ("serde", None, None, False)]},
            "lib": {}, "serde": {}}
    graph = get_dep_graph(make_metadata(spec, ["app", "lib"]), Config(workspace_only=True))
    assert names(graph) == ["app", "lib"]
    assert list(edges(graph)) == [("app", "lib")]


def test_depth_limit():
    spec = {"app": {"deps": [("a", None, None, False)]}, "a": {"deps": [("b", None, None, False)]},
            "b": {}}
    meta = make_metadata(spec, ["app"])
    assert names(get_dep_graph(meta, Config(depth=0))) == ["app"]
    assert names(get_dep_graph(meta, Config(depth=1))) == ["a", "app"]
    assert names(get_dep_graph(meta, Config())) == ["a", "app", "b"]


def test_shared_dependency_is_one_node():
    spec = {"app": {"deps": [("a", None, None, False), ("b", None, None, False)]},
            "a": {"deps": [("b", None, None, False)]}, "b": {}}
    graph = get_dep_graph(make_metadata(spec, ["app"]), Config())
    assert names(graph) == ["a", "app", "b"]
    assert set(edges(graph)) == {("app", "a"), ("app", "b"), ("a", "b")}


def test_proc_macro_handling():
    spec = {"app": {"deps": [("derive", None, None, False)]},
            "derive": {"targets": ["proc-macro"]}}
    meta = make_metadata(spec, ["app"])
    assert names(get_dep_graph(meta, Config())) == ["app"]
    graph = get_dep_graph(meta, Config(build_deps=True))
    (info,) = edges(graph)[("app", "derive")]
    assert info.kind == dep_kind_for(DependencyKind.NORMAL, True)
    assert info.kind == DepKind.BUILD


def test_proc_macro_member_skipped_without_build_deps():
    spec = {"derive": {"targets": ["proc-macro"]}}
    meta = make_metadata(spec, ["derive"])
    assert names(get_dep_graph(meta, Config())) == []
    assert names(get_dep_graph(meta, Config(build_deps=True))) == ["derive"]


def test_missing_resolve_raises():
    with pytest.raises(MetadataError):
        get_dep_graph(make_metadata(SIMPLE, ["app"], resolve=False), Config())


def test_missing_resolve_node_raises():
    meta = make_metadata(SIMPLE, ["app"])
    meta["resolve"]["nodes"] = []
    with pytest.raises(MetadataError):
        get_dep_graph(meta, Config())