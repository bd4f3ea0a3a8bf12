# SPDX-License-Identifier: Apache-2.0

from pathlib import Path

import pytest

from bcpc import config as config_module
from bcpc.config import Config


@pytest.fixture
def settings(monkeypatch):
    values = {}
    monkeypatch.setattr(config_module, "SETTINGS", values)
    return values


def test_requires_environment(settings):
    with pytest.raises(ValueError):
        Config.from_environment()


def test_defaults(settings):
    settings["BCPC_ENVIRONMENT"] = "prod"
    config = Config.from_environment()

    assert config.environment == "prod"
    assert config.encrypt_data_bag is False
    assert config.data_bag_path == Path("/var/lib/bcpc/data_bags")
    assert config.inventory_backend == "static"
    assert config.headnodes_file == Path("/etc/headnodes")


def test_overrides(settings):
    settings.update(
        {
            "BCPC_ENVIRONMENT": "prod",
            "BCPC_ENCRYPT_DATA_BAG": True,
            "BCPC_DATA_BAG_PATH": "/srv/bags",
            "BCPC_DATA_BAG_SECRET": "secret",
            "BCPC_BINARY_SERVER_URL": "http://mirror/",
        }
    )
    config = Config.from_environment()

    assert config.encrypt_data_bag is True
    assert config.data_bag_path == Path("/srv/bags")
    assert config.data_bag_secret == "secret"
    assert config.binary_server_url == "http://mirror/"


def test_invalid_backend(settings):
    settings.update({"BCPC_ENVIRONMENT": "prod", "BCPC_INVENTORY_BACKEND": "ldap"})
    with pytest.raises(ValueError):
        Config.from_environment()


def test_netbox_backend_requires_url(settings):
    settings.update({"BCPC_ENVIRONMENT": "prod", "BCPC_INVENTORY_BACKEND": "netbox"})
    with pytest.raises(ValueError):
        Config.from_environment()

    settings.update({"NETBOX_API": "https://netbox", "NETBOX_TOKEN": "token"})
    assert Config.from_environment().netbox_url == "https://netbox"
