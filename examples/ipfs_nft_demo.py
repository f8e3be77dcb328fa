# SPDX-License-Identifier: Apache-2.0

"""
IPFS NFT Demo - Create, mint and transfer an NFT collection on Hedera.

This example drives :class:`hedera_nft.nft_service.HederaNftService` through
the life of a small NFT collection whose metadata lives on IPFS. A
university account acts as treasury and issues diplomas, and one diploma is
then handed to a student account.

Workflow:
    1. **Accounts**: Create the university (treasury) and Bob (receiver)
    2. **Token**: Create a finite NFT token owned by the university
    3. **Mint**: Mint one NFT per CID in ``IPFS_CID_COLLECTION``
    4. **Balances**: Show how many NFTs each account holds
    5. **Transfer**: Associate the token with Bob and move the first serial
    6. **Final balances**: Show balances after the transfer
    7. **Ownership**: Ask the mirror node which serials each account owns

Prerequisites:
    A funded testnet operator account in ``.env``::

        OPERATOR_ID=0.0.1234
        OPERATOR_KEY=302e020100300506032b657004220420...

Examples:
    Run the demo::

        python -m examples.ipfs_nft_demo

Note:
    Every step costs HBAR from the operator account. On testnet the
    operator can be funded from the Hedera portal faucet.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from hedera_nft.ipfs_cid import COLLECTION_INFO, IPFS_CID_COLLECTION
from hedera_nft.mirror_client import MirrorNodeClient, MirrorTimeoutError
from hedera_nft.nft_service import HederaNftService

from .common import MIRROR_NODE_URL, MIRROR_WAIT_SECONDS

logger = logging.getLogger(__name__)


async def main() -> Optional[Dict[str, Any]]:
    """Run every step of the demo and return the records it produced.

    Errors are printed rather than raised. The ledger client and the mirror
    node client are closed in every case.
    """
    nft_service = HederaNftService()
    mirror = MirrorNodeClient(MIRROR_NODE_URL) if MIRROR_NODE_URL else None

    try:
        print("Starting NFT creation and transfer demo with IPFS...\n")
        print("Collection info:")
        print(f"- Name: {COLLECTION_INFO['name']}")
        print(f"- Symbol: {COLLECTION_INFO['symbol']}")
        print(f"- Total CIDs: {COLLECTION_INFO['total_cids']}")

        print("\n=== 1. Creating accounts ===")
        print("Creating University account (Treasury)...")
        university = await nft_service.create_account(500)
        print(f"University account created: {university.account_id}")

        print("Creating Bob account (Receiver)...")
        bob = await nft_service.create_account(150)
        print(f"Bob account created: {bob.account_id}")

        print("\n=== 2. Creating NFT token with University as treasury ===")
        token = await nft_service.create_nft_token(university, COLLECTION_INFO)
        print(f"Token created: {token.token_id}")

        print("\n=== 3. Minting NFTs from IPFS to University ===")
        mint_result = await nft_service.mint_nfts(token, IPFS_CID_COLLECTION)
        print("NFTs minted successfully to University!")
        print(f"Serial numbers: {[str(s) for s in mint_result.serials]}")

        print("\n=== 4. Balances before transfer ===")
        university_before = await nft_service.get_account_balance(university)
        bob_before = await nft_service.get_account_balance(bob)
        print(f"University NFTs: {university_before.tokens_or_none()}")
        print(f"Bob NFTs: {bob_before.tokens_or_none()}")

        print("\n=== 5. Transferring first NFT from University to Bob ===")
        serial = mint_result.serials[0]
        transfer_result = await nft_service.transfer_nft_with_balance_check(
            token.token_id, university, bob, serial
        )
        print("Transfer completed successfully!")
        print(f"Transferred NFT serial: {transfer_result.summary.serial_number}")

        print("\n=== 6. Final balances ===")
        university_after = await nft_service.get_account_balance(university)
        bob_after = await nft_service.get_account_balance(bob)
        print(f"University NFTs: {university_after.tokens_or_none()}")
        print(f"Bob NFTs: {bob_after.tokens_or_none()}")

        print("\n=== 7. Ownership on the mirror node ===")
        if mirror is None:
            print("No mirror node configured for this network, set MIRROR_NODE_URL")
        else:
            token_id = str(token.token_id)
            try:
                await mirror.wait_for_nft_owner(
                    token_id, serial, str(bob.account_id), timeout=MIRROR_WAIT_SECONDS
                )
                for name, account in (("University", university), ("Bob", bob)):
                    nfts = await mirror.account_nfts(str(account.account_id), token_id)
                    print(f"{name} owns: {[f'#{nft.serial_number} {nft.metadata}' for nft in nfts]}")
            except MirrorTimeoutError as e:
                print(f"Mirror node has not caught up yet: {e}")

        print("\n=== FINAL SUMMARY ===")
        print(f"University account: {university.account_id}")
        print(f"Bob account: {bob.account_id}")
        print(f"Token ID: {token.token_id}")
        print(f"Total NFTs created: {mint_result.count}")
        print(f"NFTs remaining with University: {university_after.token_amount(token.token_id)}")
        print(f"NFTs transferred to Bob: {bob_after.token_amount(token.token_id)}")
        print(f"Transferred serial number: {transfer_result.summary.serial_number}")
        print(f"Transfer success: {transfer_result.summary.success}")
        print("==================\n")

        print("All operations completed successfully!")
        print("- Created 2 accounts")
        print("- Created 1 NFT token")
        print(f"- Minted {mint_result.count} NFTs with IPFS metadata")
        print("- Transferred 1 NFT between accounts")

        return {
            "university": university,
            "bob": bob,
            "token": token,
            "mint_result": mint_result,
            "transfer_result": transfer_result,
        }
    except Exception as e:
        logger.debug("Demo failed", exc_info=True)
        print(f"Error during demo: {e}")
        return None
    finally:
        nft_service.close()
        if mirror is not None:
            await mirror.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
