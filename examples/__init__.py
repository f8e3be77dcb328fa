"""
Hedera NFT examples.

Scripts in this package show the service in action against a live network.
Each one reads operator credentials from ``.env``.

Examples:
    - ipfs_nft_demo.py: Create two accounts, mint the IPFS collection and
      transfer one diploma
    - integration_test.py: Runs the demo against a mocked ledger
    - common.py: Shared settings

Quick Start:
    Run the demo from the repository root::

        python -m examples.ipfs_nft_demo
"""
