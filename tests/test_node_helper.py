# SPDX-License-Identifier: Apache-2.0

import pytest

from bcpc.attributes import HOSTNAME_MGMT_IP_ATTR_SRCH_KEYS
from bcpc.current_node import CurrentNode
from bcpc.exceptions import ConfigStoreError, ConfigValueNotFound
from bcpc.inventory import StaticInventoryClient
from bcpc.node_helper import NodeHelper

from conftest import make_node


@pytest.fixture
def helper(config, inventory, current_node, store):
    return NodeHelper(config, inventory, current_node, config_store=store)


def hostnames(nodes):
    return [n["hostname"] for n in nodes]


def test_get_all_nodes_uses_live_node(helper, current_node):
    nodes = helper.get_all_nodes()

    assert hostnames(nodes) == ["head1", "work1", "work2"]
    assert nodes[2] is current_node.record
    assert nodes[2]["tag"] == "live"


def test_get_all_nodes_appends_unknown_node(config, inventory, store):
    node = CurrentNode(make_node("new1"))
    helper = NodeHelper(config, inventory, node, config_store=store)

    assert hostnames(helper.get_all_nodes()) == ["head1", "new1", "work1", "work2"]


def test_get_ceph_osd_nodes(helper):
    nodes = helper.get_ceph_osd_nodes()
    assert hostnames(nodes) == ["work1", "work2"]
    assert nodes[1]["tag"] == "live"


def test_get_ceph_osd_nodes_adds_current_node(config, inventory, store):
    node = CurrentNode(make_node("head1", roles=["BCPC-Headnode"]))
    helper = NodeHelper(config, inventory, node, config_store=store)

    assert hostnames(helper.get_ceph_osd_nodes()) == ["head1", "work1", "work2"]


def test_get_head_nodes_does_not_add_worker(helper):
    assert hostnames(helper.get_head_nodes()) == ["head1"]


def test_get_head_nodes_first_run(config, store):
    node = CurrentNode(make_node("head1", roles=["BCPC-Headnode"]))
    helper = NodeHelper(config, StaticInventoryClient(nodes=[]), node, config_store=store)

    assert helper.get_head_nodes() == [node.record]


def test_get_nodes_for_recipe(helper):
    assert hostnames(helper.get_nodes_for("ceph-work")) == ["work1", "work2"]
    assert hostnames(helper.get_nodes_for("ceph-head")) == ["head1"]
    assert helper.get_nodes_for("missing") == []


def test_get_nodes_for_adds_node_from_run_list(config, store, nodes):
    node = CurrentNode(make_node("new1"), run_list=["bcpc::ceph-work"])
    helper = NodeHelper(config, StaticInventoryClient(nodes=nodes), node, config_store=store)

    assert hostnames(helper.get_nodes_for("ceph-work")) == ["new1", "work1", "work2"]
    assert hostnames(helper.get_nodes_for("ceph-head")) == ["head1"]


def test_get_node_attributes(helper):
    assert helper.get_node_attributes(HOSTNAME_MGMT_IP_ATTR_SRCH_KEYS, "ceph-work") == [
        {"hostname": "work1", "mgmt_ip": "10.0.100.21"},
        {"hostname": "work2", "mgmt_ip": "10.0.100.22"},
    ]


def test_get_cached_head_node_names(helper, config):
    assert helper.get_cached_head_node_names() == []

    config.headnodes_file.write_text("# head nodes\nhead2\n\n  head1  \n")
    assert helper.get_cached_head_node_names() == ["head1", "head2"]


def test_get_binary_server_url(helper, config):
    assert helper.get_binary_server_url() == "http://chef.example.com/"

    config.binary_server_url = "http://mirror.example.com/bcpc/"
    assert helper.get_binary_server_url() == "http://mirror.example.com/bcpc/"


def test_float_and_storage_host(helper):
    assert helper.float_host("node1", "example.com") == "f-node1.example.com"
    assert helper.storage_host("node1", "example.com") == "s-node1.example.com"


def test_hosts_without_floating_ip(config, inventory, store):
    record = make_node("node1", mgmt_ip="10.0.100.5")
    record["bcpc"]["floating"]["ip"] = "10.0.100.5"
    helper = NodeHelper(config, inventory, CurrentNode(record), config_store=store)

    assert helper.float_host("node1", "example.com") == "node1.example.com"
    assert helper.storage_host("node1") == "node1"


def test_config_values(helper):
    assert helper.make_config("rabbitmq-cookie", "cookie") == "cookie"
    assert helper.get_config("rabbitmq-cookie").value == "cookie"
    assert helper.require_config("rabbitmq-cookie") == "cookie"
    with pytest.raises(ConfigValueNotFound):
        helper.require_config("missing")


def test_current_node_from_file(tmp_path):
    path = tmp_path / "node.yml"
    path.write_text(
        "hostname: node1\n"
        "chef_environment: test\n"
        "run_list:\n"
        "  - bcpc::ceph-work\n"
        "bcpc:\n"
        "  management:\n"
        "    ip: 10.0.100.5\n",
        encoding="utf-8",
    )
    node = CurrentNode.from_file(path)

    assert node.hostname == "node1"
    assert node.chef_environment == "test"
    assert node.management_ip == "10.0.100.5"
    assert node.floating_ip is None
    assert node.has_recipe("bcpc::ceph-work")
    assert "run_list" not in node.record


def test_current_node_requires_hostname():
    with pytest.raises(ValueError):
        CurrentNode({"chef_environment": "test"})


def test_searches_do_not_need_data_bag_secret(config, inventory, current_node, tmp_path):
    config.encrypt_data_bag = True
    config.secret_file = tmp_path / "missing-secret"
    helper = NodeHelper(config, inventory, current_node)

    assert hostnames(helper.get_all_nodes()) == ["head1", "work1", "work2"]
    with pytest.raises(ConfigStoreError):
        helper.get_config("key")


def test_config_store_is_built_from_config(config, inventory, current_node):
    helper = NodeHelper(config, inventory, current_node)

    assert helper.make_config("key", "value") == "value"
    assert helper.config_store is helper.config_store
    assert (config.data_bag_path / "configs" / "test.json").exists()
