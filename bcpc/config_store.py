# SPDX-License-Identifier: Apache-2.0

"""Per-environment configuration store backed by JSON data bags."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from bcpc.config import Config
from bcpc.crypto import SecretCipher, load_secret
from bcpc.exceptions import ConfigStoreError, ConfigValueNotFound


@dataclass(frozen=True)
class ConfigValue:
    """Result of a configuration lookup.

    Attributes:
        key: Requested key
        found: Whether the key exists in the store
        value: Stored (decrypted) value, None when not found
    """

    key: str
    found: bool
    value: Any = None


class JsonDataBagBackend:
    """Stores data bag items as JSON documents below a base directory.

    Items live at <base_path>/<bag>/<item>.json.
    """

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)

    def _item_path(self, bag: str, item: str) -> Path:
        return self.base_path / bag / f"{item}.json"

    def bag_exists(self, bag: str) -> bool:
        return (self.base_path / bag).is_dir()

    def create_bag(self, bag: str) -> None:
        try:
            (self.base_path / bag).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigStoreError(f"Failed to create data bag {bag}: {e}") from e

    def load_item(self, bag: str, item: str) -> Optional[Dict[str, Any]]:
        """Load a data bag item.

        Returns:
            Item data or None if the item does not exist
        """
        item_path = self._item_path(bag, item)
        if not item_path.exists():
            return None

        try:
            with open(item_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.error(f"Failed to load data bag item {item_path}: {e}")
            raise ConfigStoreError(
                f"Failed to load data bag item {bag}/{item}: {e}"
            ) from e

    def save_item(self, bag: str, item: str, data: Dict[str, Any]) -> None:
        item_path = self._item_path(bag, item)
        try:
            item_path.parent.mkdir(parents=True, exist_ok=True)
            with open(item_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
        except IOError as e:
            logger.error(f"Failed to save data bag item {item_path}: {e}")
            raise ConfigStoreError(
                f"Failed to save data bag item {bag}/{item}: {e}"
            ) from e


class ConfigStore:
    """Named configuration values of one environment.

    The backing item "<bag>/<environment>" is created on first use. When
    encryption is enabled values are stored encrypted and transparently
    decrypted on read.
    """

    def __init__(
        self,
        environment: str,
        backend: JsonDataBagBackend,
        bag: str = "configs",
        cipher: Optional[SecretCipher] = None,
    ):
        self.environment = environment
        self.backend = backend
        self.bag = bag
        self.cipher = cipher
        self._item: Optional[Dict[str, Any]] = None

    @classmethod
    def from_config(cls, config: Config) -> "ConfigStore":
        """Build a store from the helper configuration."""
        cipher = None
        if config.encrypt_data_bag:
            cipher = SecretCipher(
                load_secret(config.data_bag_secret, config.secret_file)
            )
        return cls(
            config.environment,
            JsonDataBagBackend(config.data_bag_path),
            bag=config.data_bag_name,
            cipher=cipher,
        )

    @property
    def encrypted(self) -> bool:
        return self.cipher is not None

    def load(self) -> Dict[str, Any]:
        """Load the environment item, creating the bag and item if needed."""
        if self._item is not None:
            return self._item

        if not self.backend.bag_exists(self.bag):
            logger.info(f'Creating data bag "{self.bag}"')
            self.backend.create_bag(self.bag)

        item = self.backend.load_item(self.bag, self.environment)
        if item is None:
            item = {"id": self.environment}
            self.backend.save_item(self.bag, self.environment, item)
            logger.info(f'Created new data bag item "{self.bag}/{self.environment}"')
        else:
            logger.info(
                f'Loaded existing data bag item "{self.bag}/{self.environment}"'
            )

        self._item = item
        return self._item

    def _decode(self, key: str, raw: Any) -> Any:
        # The item id is never encrypted
        if key == "id" or not self.encrypted:
            return raw
        return self.cipher.decrypt(raw)

    def _encode(self, value: Any) -> Any:
        return self.cipher.encrypt(value) if self.encrypted else value

    def make_config(self, key: str, value: Any) -> Any:
        """Store a value unless the key already exists.

        Args:
            key: Configuration key
            value: Value to store if the key is new

        Returns:
            The stored value, which is the existing one if the key was present
        """
        item = self.load()
        if item.get(key) is None:
            item[key] = self._encode(value)
            self.backend.save_item(self.bag, self.environment, item)
            logger.info(f'Creating new item with key "{key}"')
            return value

        logger.info(f'Loaded existing item with key "{key}"')
        return self._decode(key, item[key])

    def set_config(self, key: str, value: Any) -> None:
        """Store a value, replacing any existing one."""
        item = self.load()
        item[key] = self._encode(value)
        self.backend.save_item(self.bag, self.environment, item)
        logger.info(f'Updated item with key "{key}"')

    def get_config(self, key: str) -> ConfigValue:
        """Look up a configuration value.

        Returns:
            ConfigValue with found=False if the key is absent
        """
        item = self.load()
        logger.info(f'Fetching value for key "{key}"')
        raw = item.get(key)
        if raw is None:
            return ConfigValue(key=key, found=False)
        return ConfigValue(key=key, found=True, value=self._decode(key, raw))

    def require_config(self, key: str) -> Any:
        """Look up a configuration value that must exist.

        Raises:
            ConfigValueNotFound: If the key is absent
        """
        result = self.get_config(key)
        if not result.found:
            raise ConfigValueNotFound(key)
        return result.value
