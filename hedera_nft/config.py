# SPDX-License-Identifier: Apache-2.0

"""
Configuration for the Hedera NFT demo.

Settings are read once at import time. A ``.env`` file in the working
directory is loaded first, then regular environment variables apply.
Values already in the environment are not overridden by ``.env``.

Environment Variables:
    OPERATOR_ID: Account id that pays for every transaction (``0.0.x``)
    OPERATOR_KEY: Private key of the operator account
    HEDERA_NETWORK: Network name passed to the SDK, e.g. ``testnet``,
        ``previewnet``, ``mainnet`` or ``local``
    MIRROR_NODE_URL: Mirror node REST endpoint. When unset it is derived
        from the network, and left as None for networks without a known
        mirror node

Examples:
    A minimal ``.env``::

        OPERATOR_ID=0.0.1234
        OPERATOR_KEY=302e020100300506032b657004220420...

    Switching to previewnet::

        import os
        os.environ["HEDERA_NETWORK"] = "previewnet"

        from hedera_nft.config import HEDERA_NETWORK, MIRROR_NODE_URL

Note:
    Everything defaults to testnet. Mainnet costs real HBAR.
"""

import importlib
import os
import unittest
import unittest.mock
from dataclasses import FrozenInstanceError, dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Public mirror node REST endpoints per network name.
MIRROR_NODE_URLS = {
    "testnet": "https://testnet.mirrornode.hedera.com/api/v1",
    "previewnet": "https://previewnet.mirrornode.hedera.com/api/v1",
    "mainnet": "https://mainnet-public.mirrornode.hedera.com/api/v1",
    "solo": "http://localhost:38081/api/v1",
    "local": "http://localhost:5551/api/v1",
    "localhost": "http://localhost:5551/api/v1",
}

# Operator credentials. The service refuses to start without both.
OPERATOR_ID = os.getenv("OPERATOR_ID")
OPERATOR_KEY = os.getenv("OPERATOR_KEY")

HEDERA_NETWORK = os.getenv("HEDERA_NETWORK", "testnet")


def mirror_node_url(network: str) -> str:
    """Public mirror node REST endpoint for ``network``."""
    if network not in MIRROR_NODE_URLS:
        raise ValueError(f"Unknown Hedera network: {network}")
    return MIRROR_NODE_URLS[network]


MIRROR_NODE_URL: Optional[str] = os.getenv("MIRROR_NODE_URL") or MIRROR_NODE_URLS.get(
    HEDERA_NETWORK
)


@dataclass(frozen=True)
class ServiceConfig:
    """Fee ceilings applied to the shared client, in HBAR.

    The ledger charges only the actual fee. These values are upper bounds the
    operator agrees to pay per transaction and per paid query.
    """

    max_transaction_fee: int = 50
    max_query_payment: int = 30


class Test(unittest.TestCase):
    def reload_with(self, **env) -> object:
        self.addCleanup(importlib.reload, importlib.import_module(__name__))
        with unittest.mock.patch.dict(os.environ, env):
            for name in ("MIRROR_NODE_URL", "HEDERA_NETWORK"):
                if name not in env:
                    os.environ.pop(name, None)
            with unittest.mock.patch("dotenv.load_dotenv"):
                return importlib.reload(importlib.import_module(__name__))

    def test_mirror_url_derived_from_network(self):
        config = self.reload_with(HEDERA_NETWORK="previewnet")
        self.assertEqual(
            config.MIRROR_NODE_URL, "https://previewnet.mirrornode.hedera.com/api/v1"
        )

    def test_explicit_mirror_url_with_local_network(self):
        config = self.reload_with(
            HEDERA_NETWORK="local", MIRROR_NODE_URL="http://localhost:9999/api/v1"
        )
        self.assertEqual(config.HEDERA_NETWORK, "local")
        self.assertEqual(config.MIRROR_NODE_URL, "http://localhost:9999/api/v1")

    def test_unknown_network_does_not_break_import(self):
        config = self.reload_with(HEDERA_NETWORK="Testnet")
        self.assertIsNone(config.MIRROR_NODE_URL)
        with self.assertRaises(ValueError):
            config.mirror_node_url("Testnet")

    def test_service_config_is_frozen(self):
        with self.assertRaises(FrozenInstanceError):
            ServiceConfig().max_transaction_fee = 1


if __name__ == "__main__":
    unittest.main()
