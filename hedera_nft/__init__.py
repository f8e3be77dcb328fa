# SPDX-License-Identifier: Apache-2.0

"""
Hedera NFT demo - create, mint and transfer NFT collections on Hedera.

The ledger work (signing, consensus, fees, receipts) is done by the
``hiero-sdk-python`` SDK. This package only assembles requests, awaits them
one after another and reshapes the results into plain records.

Modules:
- **nft_service**: :class:`HederaNftService`, one coroutine per ledger action
  plus the collection and transfer workflows
- **models**: Records returned by the service
- **mirror_client**: Read-only Mirror Node REST client for NFT ownership
- **ipfs_cid**: IPFS content identifiers minted by the demo
- **config**: Operator credentials and network, read from ``.env``
- **cli**: Command-line access to single operations

Quick Start:
    Create a collection from the bundled CIDs::

        import asyncio
        from hedera_nft.ipfs_cid import COLLECTION_INFO, IPFS_CID_COLLECTION
        from hedera_nft.nft_service import HederaNftService

        async def main():
            async with HederaNftService() as service:
                result = await service.create_complete_nft_collection(
                    COLLECTION_INFO, IPFS_CID_COLLECTION
                )
                print(result.summary)

        asyncio.run(main())
"""
