# SPDX-License-Identifier: Apache-2.0

"""NetBox API connection management for inventory searches."""

import time
from typing import Optional

from loguru import logger
import pynetbox
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from bcpc.config import Config
from bcpc.exceptions import InventoryConnectionError

# Inventory searches only read from NetBox
READ_METHODS = ["HEAD", "GET", "OPTIONS"]


class ConnectionManager:
    """Opens a read-only NetBox API handle for node searches.

    The connection is verified with the NetBox status endpoint and retried
    retry_attempts times, retry_delay seconds apart.
    """

    def __init__(self, config: Config):
        self.config = config
        self.api: Optional[pynetbox.api] = None
        self.netbox_version: Optional[str] = None
        self._session: Optional[requests.Session] = None

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(
            max_retries=Retry(
                total=self.config.retry_attempts,
                backoff_factor=1,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=READ_METHODS,
            )
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        if self.config.ignore_ssl_errors:
            requests.packages.urllib3.disable_warnings()
            session.verify = False
            logger.debug("SSL certificate verification disabled")

        return session

    def _open(self) -> pynetbox.api:
        self.disconnect()
        self._session = self._create_session()
        api = pynetbox.api(self.config.netbox_url, self.config.netbox_token)
        api.http_session = self._session

        status = api.status()
        self.netbox_version = status.get("netbox-version")
        return api

    def connect(self) -> pynetbox.api:
        """Connect to NetBox.

        Returns:
            pynetbox.api: Verified NetBox API instance

        Raises:
            InventoryConnectionError: If no attempt succeeds
        """
        attempts = self.config.retry_attempts
        if attempts < 1:
            raise InventoryConnectionError(
                f"Cannot connect to NetBox with {attempts} retry attempts"
            )

        logger.info(f"Connecting to NetBox {self.config.netbox_url}")
        for attempt in range(1, attempts + 1):
            try:
                self.api = self._open()
            except Exception as e:
                logger.warning(f"NetBox connection attempt {attempt}/{attempts} failed: {e}")
                if attempt == attempts:
                    self.disconnect()
                    raise InventoryConnectionError(
                        f"Failed to connect to NetBox after {attempts} attempts"
                    ) from e
                time.sleep(self.config.retry_delay)
            else:
                logger.debug(f"Connected to NetBox {self.netbox_version}")
                return self.api

    def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None
        self.api = None
