# SPDX-License-Identifier: Apache-2.0

"""
Client identification for HTTP requests made by the demo.

The mirror node client tags every request with a header naming this package
and its installed version, which makes demo traffic easy to pick out of
mirror node access logs.

Examples:
    Build the header by hand::

        from hedera_nft.metadata import Metadata

        headers = {Metadata.CLIENT_HEADER: Metadata.get_client_header_val()}
        # {"x-hedera-nft-client": "hedera-nft-demo/0.1.0"}
"""

import importlib.metadata as metadata

# Package name constant for metadata lookup
PACKAGE_NAME = "hedera-nft-demo"


class Metadata:
    """Static helpers for the client identification header."""

    CLIENT_HEADER = "x-hedera-nft-client"

    @staticmethod
    def get_client_header_val() -> str:
        """Return the header value in the form ``hedera-nft-demo/{version}``.

        Source checkouts that were never installed report ``0.0.0``.
        """
        try:
            version = metadata.version(PACKAGE_NAME)
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        return f"{PACKAGE_NAME}/{version}"
