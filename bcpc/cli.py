# SPDX-License-Identifier: Apache-2.0

"""Command line interface for the BCPC helpers."""

import json
import sys
from contextlib import contextmanager
from typing import List, Optional

from loguru import logger
import typer

from bcpc.config import Config
from bcpc.config_store import ConfigStore
from bcpc.crypto import generate_secret
from bcpc.current_node import CurrentNode
from bcpc.exceptions import BcpcException, ConfigValueNotFound
from bcpc.inventory import create_inventory_client
from bcpc.keys import ceph_keygen as _ceph_keygen
from bcpc.node_helper import DEFAULT_COOKBOOK, NodeHelper
from bcpc.reverse_zone import compute_reverse_zone
from bcpc.utils import setup_logging

app = typer.Typer(help="Helpers for BCPC node inventory and configuration values.")


@app.callback()
def main() -> None:
    # stdout carries command output
    setup_logging(sys.stderr)


def _fail(message: str) -> None:
    logger.error(message)
    raise typer.Exit(code=1)


@contextmanager
def _open_helper():
    config = Config.from_environment()
    current_node = CurrentNode.from_file(config.node_file)
    with create_inventory_client(config) as inventory:
        yield NodeHelper(config, inventory, current_node)


def _parse_value(value: str):
    try:
        return json.loads(value)
    except ValueError:
        return value


@app.command("reverse-zone")
def reverse_zone(cidr: str = typer.Argument(..., help="Network, e.g. 10.0.100.0/24")):
    """Print the reverse DNS zone of a network."""
    try:
        typer.echo(compute_reverse_zone(cidr))
    except BcpcException as e:
        _fail(str(e))


@app.command("ceph-keygen")
def ceph_keygen():
    """Print a new Ceph keyring secret."""
    typer.echo(_ceph_keygen())


@app.command("generate-secret")
def generate_data_bag_secret():
    """Print a new secret for encrypted configuration values."""
    typer.echo(generate_secret())


@app.command("get-config")
def get_config(key: str):
    """Print a configuration value, failing if it does not exist."""
    try:
        store = ConfigStore.from_config(Config.from_environment())
        value = store.require_config(key)
    except ConfigValueNotFound as e:
        _fail(str(e))
    except (BcpcException, ValueError) as e:
        _fail(f"Failed to read configuration: {e}")
    typer.echo(json.dumps(value) if not isinstance(value, str) else value)


@app.command("make-config")
def make_config(
    key: str,
    value: str = typer.Argument(..., help="Value, parsed as JSON when possible"),
):
    """Store a configuration value unless it already exists and print it."""
    try:
        store = ConfigStore.from_config(Config.from_environment())
        result = store.make_config(key, _parse_value(value))
    except (BcpcException, ValueError) as e:
        _fail(f"Failed to store configuration: {e}")
    typer.echo(json.dumps(result) if not isinstance(result, str) else result)


@app.command("nodes")
def nodes(
    recipe: Optional[str] = typer.Option(None, help="Only nodes running this recipe"),
    cookbook: str = typer.Option(DEFAULT_COOKBOOK, help="Cookbook of the recipe"),
    headnodes: bool = typer.Option(False, "--headnodes", help="Only head nodes"),
):
    """List the host names of nodes in this environment."""
    try:
        with _open_helper() as helper:
            if headnodes:
                results = helper.get_head_nodes()
            elif recipe:
                results = helper.get_nodes_for(recipe, cookbook)
            else:
                results = helper.get_all_nodes()
    except (BcpcException, ValueError, OSError) as e:
        _fail(f"Failed to search nodes: {e}")
    for node in results:
        typer.echo(node.get("hostname"))


@app.command("node-attributes")
def node_attributes(
    recipe: str,
    attr: List[str] = typer.Option(
        ..., "--attr", help="Attribute as key=dotted.path, may be repeated"
    ),
    cookbook: str = typer.Option(DEFAULT_COOKBOOK, help="Cookbook of the recipe"),
):
    """Print selected attributes of nodes running a recipe as JSON."""
    srch_keys = {}
    for item in attr:
        name, sep, path = item.partition("=")
        if not sep or not name or not path:
            raise typer.BadParameter(f"Expected key=path, got '{item}'")
        srch_keys[name] = path

    try:
        with _open_helper() as helper:
            results = helper.get_node_attributes(srch_keys, recipe, cookbook)
    except (BcpcException, ValueError, OSError) as e:
        _fail(f"Failed to get node attributes: {e}")
    typer.echo(json.dumps(results, indent=2))


if __name__ == "__main__":
    app()
