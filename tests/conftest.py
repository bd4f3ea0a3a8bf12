# SPDX-License-Identifier: Apache-2.0

import pytest
import yaml

from bcpc.config import Config
from bcpc.config_store import ConfigStore, JsonDataBagBackend
from bcpc.current_node import CurrentNode
from bcpc.inventory import StaticInventoryClient


def make_node(hostname, environment="test", roles=None, recipes=None, mgmt_ip=None):
    return {
        "hostname": hostname,
        "chef_environment": environment,
        "roles": roles or [],
        "recipes": recipes or [],
        "bcpc": {
            "management": {"ip": mgmt_ip or "10.0.100.1"},
            "floating": {"ip": "192.168.100.1"},
            "graphite": {"web_port": 8888},
        },
    }


@pytest.fixture
def config(tmp_path):
    return Config(
        environment="test",
        data_bag_path=tmp_path / "data_bags",
        headnodes_file=tmp_path / "headnodes",
        chef_server_url="https://chef.example.com:443/organizations/bcpc",
    )


@pytest.fixture
def store(config):
    return ConfigStore(config.environment, JsonDataBagBackend(config.data_bag_path))


@pytest.fixture
def nodes():
    return [
        make_node(
            "head1",
            roles=["BCPC-Headnode"],
            recipes=["bcpc::ceph-head"],
            mgmt_ip="10.0.100.11",
        ),
        make_node(
            "work1", roles=["BCPC-Worknode"], recipes=["bcpc::ceph-work"], mgmt_ip="10.0.100.21"
        ),
        make_node(
            "work2", roles=["BCPC-Worknode"], recipes=["bcpc::ceph-work"], mgmt_ip="10.0.100.22"
        ),
        make_node("other1", environment="other", recipes=["bcpc::ceph-work"]),
    ]


@pytest.fixture
def inventory_file(tmp_path, nodes):
    path = tmp_path / "nodes.yml"
    path.write_text(yaml.safe_dump({"nodes": nodes}), encoding="utf-8")
    return path


@pytest.fixture
def inventory(inventory_file):
    return StaticInventoryClient(inventory_file)


@pytest.fixture
def current_node():
    record = make_node(
        "work2", roles=["BCPC-Worknode"], recipes=["bcpc::ceph-work"], mgmt_ip="10.0.100.22"
    )
    record["tag"] = "live"
    return CurrentNode(record)
