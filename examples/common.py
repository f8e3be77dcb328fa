# SPDX-License-Identifier: Apache-2.0

"""
Common configuration for the Hedera NFT examples.

Operator credentials and the network are read by :mod:`hedera_nft.config`.
This module only adds the settings that the example scripts use on their
own.

Environment Variables:
    MIRROR_NODE_URL: Mirror node REST endpoint, see :mod:`hedera_nft.config`
    MIRROR_WAIT_SECONDS: How long the demo waits for the mirror node to
        report a transfer

Usage Examples:
    Pointing the demo at a local mirror node::

        import os
        os.environ["MIRROR_NODE_URL"] = "http://localhost:5551/api/v1"

        from examples.common import MIRROR_NODE_URL
"""

import os

from hedera_nft.config import MIRROR_NODE_URL  # noqa: F401

# Mirror nodes usually lag consensus by a few seconds.
MIRROR_WAIT_SECONDS = float(os.getenv("MIRROR_WAIT_SECONDS", "20"))
