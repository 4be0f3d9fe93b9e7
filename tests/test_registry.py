import pytest

from wigle_nodes import registry
from wigle_nodes.plugins.wigle.node import WIGLE_NODE
from wigle_nodes.schema import NodeSpec


pytestmark = pytest.mark.usefixtures("registry_db")


def _spec(name="demo.echo", version="1.0.0", **extra):
    d = {"name": name, "version": version, "title": "Echo", "category": "Demo", "impl": {"type": "python", "module": "demo"}}
    d.update(extra)
    return d


def test_builtin_specs_round_trip_through_the_registry():
    registry.install_nodes(registry.builtin_specs())

    stored = registry.get_node("wigle.search")
    assert NodeSpec(**stored) == WIGLE_NODE


def test_list_nodes_summaries():
    registry.install_nodes(registry.builtin_specs())
    registry.install_nodes([_spec(inputs={"text": {"type": "string"}})])

    rows = registry.list_nodes()
    assert [r["name"] for r in rows] == ["demo.echo", "wigle.search"]

    demo, wigle = rows
    assert demo["doc"] == "Inputs: text"
    assert "required_keys" not in demo
    assert wigle["category"] == "WiGLE"
    assert wigle["enabled"] is True
    assert wigle["required_keys"] == ["WIGLE_API_KEY"]
    assert wigle["doc"].startswith("Search wifi networks")


def test_list_nodes_by_category():
    registry.install_nodes(registry.builtin_specs() + [_spec()])
    assert [r["name"] for r in registry.list_nodes("WiGLE")] == ["wigle.search"]


def test_install_updates_existing_version():
    registry.install_nodes([_spec(title="Echo")])
    registry.install_nodes([_spec(title="Echo v2")])

    rows = registry.list_nodes()
    assert len(rows) == 1
    assert rows[0]["title"] == "Echo v2"
    assert registry.get_node("demo.echo")["title"] == "Echo v2"


def test_get_node_versions():
    registry.install_nodes([_spec(version="1.0.0"), _spec(version="1.1.0", title="Newer")])

    assert registry.get_node("demo.echo")["version"] == "1.1.0"
    assert registry.get_node("demo.echo", "1.0.0")["version"] == "1.0.0"
    assert registry.get_node("demo.echo", "9.9.9") is None
    assert registry.get_node("missing.node") is None


def test_invalid_spec_is_rejected():
    with pytest.raises(ValueError):
        registry.install_nodes([_spec(name="unnamespaced")])
    assert registry.list_nodes() == []


def test_builtin_credentials_match_node_auth():
    (cred,) = registry.builtin_credentials()
    assert cred["name"] == WIGLE_NODE.auth.credential
    assert list(cred["properties"]) == ["api_key"]
