"""Tests for values file helpers."""

import pytest
import yaml

from auto_deploy.yaml_tools import (
    deep_merge,
    dump_manifests,
    parse_key_path,
    parse_set_value,
    set_value,
)


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("releaseOverride", ["releaseOverride"]),
        ("gitlab.app", ["gitlab", "app"]),
        ("workers.worker1.command[0]", ["workers", "worker1", "command", 0]),
        ("a[1][2].b", ["a", 1, 2, "b"]),
        (
            r"networkPolicy.spec.podSelector.matchLabels.app\.gitlab\.com/env",
            ["networkPolicy", "spec", "podSelector", "matchLabels", "app.gitlab.com/env"],
        ),
    ],
)
def test_parse_key_path(key: str, expected: list) -> None:
    assert parse_key_path(key) == expected


@pytest.mark.parametrize("key", ["", "a..b", "[0]", "a[x]", "a.[0]"])
def test_parse_key_path_malformed(key: str) -> None:
    with pytest.raises(ValueError):
        parse_key_path(key)


def test_set_value_builds_ordered_workers() -> None:
    data: dict = {}
    set_value(data, "workers.worker2.command[0]", "echo")
    set_value(data, "workers.worker1.command[0]", "echo")
    set_value(data, "workers.worker2.command[1]", "worker2")
    set_value(data, "workers.worker1.command[1]", "worker1")
    assert data == {
        "workers": {
            "worker2": {"command": ["echo", "worker2"]},
            "worker1": {"command": ["echo", "worker1"]},
        }
    }
    assert list(data["workers"]) == ["worker2", "worker1"]


def test_set_value_overrides_existing() -> None:
    data = {"gitlab": {"app": "old", "env": "prod"}}
    set_value(data, "gitlab.app", "new")
    assert data == {"gitlab": {"app": "new", "env": "prod"}}


def test_set_value_conflict() -> None:
    data = {"gitlab": "scalar"}
    with pytest.raises(ValueError, match="Conflict"):
        set_value(data, "gitlab.app", "x")
    with pytest.raises(ValueError, match="Conflict"):
        set_value({"workers": {}}, "workers[0]", "x")


def test_parse_set_value() -> None:
    assert parse_set_value("gitlab.app=group/project") == ("gitlab.app", "group/project")
    assert parse_set_value("application.database_url=postgres://u:p@h/db?a=b") == (
        "application.database_url",
        "postgres://u:p@h/db?a=b",
    )
    assert parse_set_value("strategyType=") == ("strategyType", "")
    with pytest.raises(ValueError):
        parse_set_value("strategyType")


def test_deep_merge() -> None:
    base = {"image": {"repository": "repo", "tag": "stable"}, "workers": {"a": {"command": ["x", "y"]}}}
    override = {"image": {"tag": "v2"}, "workers": {"a": {"command": ["z"]}}, "replicaCount": 2}
    assert deep_merge(base, override) == {
        "image": {"repository": "repo", "tag": "v2"},
        "workers": {"a": {"command": ["z"]}},
        "replicaCount": 2,
    }
    assert base["image"]["tag"] == "stable"


def test_deep_merge_none_removes_key() -> None:
    assert deep_merge({"strategyType": "Recreate", "a": 1}, {"strategyType": None}) == {"a": 1}


def test_dump_manifests() -> None:
    manifests = [
        {"kind": "Deployment", "metadata": {"name": "a"}},
        {"kind": "NetworkPolicy", "metadata": {"name": "b", "annotations": {"note": "line1\nline2\n"}}},
    ]
    output = dump_manifests(manifests)
    assert output.startswith("---\n")
    assert "note: |" in output
    assert [doc for doc in yaml.safe_load_all(output) if doc is not None] == manifests


def test_dump_no_manifests() -> None:
    assert dump_manifests([]) == ""
