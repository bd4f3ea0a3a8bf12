# SPDX-License-Identifier: Apache-2.0

"""Configuration management for the BCPC helpers."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dynaconf import Dynaconf

# Default configuration values
DEFAULT_DATA_BAG_PATH = "/var/lib/bcpc/data_bags"
DEFAULT_DATA_BAG_NAME = "configs"
DEFAULT_SECRET_FILE = "/etc/bcpc/encrypted_data_bag_secret"
DEFAULT_INVENTORY_BACKEND = "static"
DEFAULT_INVENTORY_FILE = "/etc/bcpc/nodes.yml"
DEFAULT_NODE_FILE = "/etc/bcpc/node.yml"
DEFAULT_HEADNODES_FILE = "/etc/headnodes"
DEFAULT_CHEF_SERVER_URL = "https://localhost"
DEFAULT_RETRY_ATTEMPTS = 10
DEFAULT_RETRY_DELAY = 1
ALLOWED_INVENTORY_BACKENDS = ["static", "netbox"]

# Initialize settings once at module level
SETTINGS = Dynaconf(
    envvar_prefix=False,  # No prefix, use exact environment variable names
    environments=False,  # Disable environments feature
    load_dotenv=False,  # Don't load .env files
)


@dataclass
class Config:
    """Configuration settings for the BCPC helpers.

    Attributes:
        environment: Name of the environment the current node belongs to
        encrypt_data_bag: Whether config values are stored encrypted
        data_bag_path: Directory holding the JSON data bags
        data_bag_name: Name of the data bag holding per-environment configs
        data_bag_secret: Secret used for encrypted values, if given inline
        secret_file: File to read the secret from when not given inline
        inventory_backend: Source of node records (static or netbox)
        inventory_file: YAML file with node records for the static backend
        node_file: YAML file with the record of the current node
        netbox_url: NetBox API URL for the netbox backend
        netbox_token: Authentication token for NetBox API
        ignore_ssl_errors: Whether to ignore SSL certificate errors
        retry_attempts: Number of retry attempts for API calls
        retry_delay: Delay in seconds between retry attempts
        headnodes_file: File listing the cached head node names
        binary_server_url: Explicit URL of the binary server
        chef_server_url: URL of the configuration server
    """

    environment: str
    encrypt_data_bag: bool = False
    data_bag_path: Path = field(default_factory=lambda: Path(DEFAULT_DATA_BAG_PATH))
    data_bag_name: str = DEFAULT_DATA_BAG_NAME
    data_bag_secret: str = ""
    secret_file: Path = field(default_factory=lambda: Path(DEFAULT_SECRET_FILE))
    inventory_backend: str = DEFAULT_INVENTORY_BACKEND
    inventory_file: Path = field(default_factory=lambda: Path(DEFAULT_INVENTORY_FILE))
    node_file: Path = field(default_factory=lambda: Path(DEFAULT_NODE_FILE))
    netbox_url: Optional[str] = None
    netbox_token: str = ""
    ignore_ssl_errors: bool = True
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_delay: int = DEFAULT_RETRY_DELAY
    headnodes_file: Path = field(default_factory=lambda: Path(DEFAULT_HEADNODES_FILE))
    binary_server_url: Optional[str] = None
    chef_server_url: str = DEFAULT_CHEF_SERVER_URL

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables using dynaconf.

        Returns:
            Config: Configuration instance populated from environment variables

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        environment = SETTINGS.get("BCPC_ENVIRONMENT")
        if not environment:
            raise ValueError("BCPC_ENVIRONMENT environment variable is required")

        inventory_backend = SETTINGS.get(
            "BCPC_INVENTORY_BACKEND", DEFAULT_INVENTORY_BACKEND
        )
        if inventory_backend not in ALLOWED_INVENTORY_BACKENDS:
            raise ValueError(
                f"BCPC_INVENTORY_BACKEND must be one of {ALLOWED_INVENTORY_BACKENDS}, "
                f"got '{inventory_backend}'"
            )

        netbox_url = SETTINGS.get("NETBOX_API")
        netbox_token = SETTINGS.get("NETBOX_TOKEN", cls._read_secret("NETBOX_TOKEN"))
        if inventory_backend == "netbox":
            if not netbox_url:
                raise ValueError(
                    "NETBOX_API environment variable is required for the netbox backend"
                )
            if not netbox_token:
                raise ValueError("NETBOX_TOKEN not found in environment or secrets")

        return cls(
            environment=str(environment),
            encrypt_data_bag=bool(SETTINGS.get("BCPC_ENCRYPT_DATA_BAG", False)),
            data_bag_path=Path(
                SETTINGS.get("BCPC_DATA_BAG_PATH", DEFAULT_DATA_BAG_PATH)
            ),
            data_bag_name=SETTINGS.get("BCPC_DATA_BAG_NAME", DEFAULT_DATA_BAG_NAME),
            data_bag_secret=SETTINGS.get(
                "BCPC_DATA_BAG_SECRET", cls._read_secret("BCPC_DATA_BAG_SECRET")
            ),
            secret_file=Path(SETTINGS.get("BCPC_SECRET_FILE", DEFAULT_SECRET_FILE)),
            inventory_backend=inventory_backend,
            inventory_file=Path(
                SETTINGS.get("BCPC_INVENTORY_FILE", DEFAULT_INVENTORY_FILE)
            ),
            node_file=Path(SETTINGS.get("BCPC_NODE_FILE", DEFAULT_NODE_FILE)),
            netbox_url=netbox_url,
            netbox_token=netbox_token,
            ignore_ssl_errors=SETTINGS.get("IGNORE_SSL_ERRORS", True),
            retry_attempts=SETTINGS.get("BCPC_RETRY_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS),
            retry_delay=SETTINGS.get("BCPC_RETRY_DELAY", DEFAULT_RETRY_DELAY),
            headnodes_file=Path(
                SETTINGS.get("BCPC_HEADNODES_FILE", DEFAULT_HEADNODES_FILE)
            ),
            binary_server_url=SETTINGS.get("BCPC_BINARY_SERVER_URL"),
            chef_server_url=SETTINGS.get("CHEF_SERVER_URL", DEFAULT_CHEF_SERVER_URL),
        )

    @staticmethod
    def _read_secret(secret_name: str) -> str:
        """Read secret from file system.

        Args:
            secret_name: Name of the secret to read

        Returns:
            str: Secret value or empty string if not found
        """
        secret_path = Path(f"/run/secrets/{secret_name}")
        try:
            return secret_path.read_text(encoding="utf-8").strip()
        except (EnvironmentError, FileNotFoundError):
            return ""
