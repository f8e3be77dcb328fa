# SPDX-License-Identifier: Apache-2.0

"""
Runs the example scripts against a mocked ledger and mirror node.

The demo talks to a live network when run directly. Here the service and the
mirror client are replaced with mocks so the step order and the returned
records can be checked without spending HBAR.
"""

import unittest
import unittest.mock

from hedera_nft.ipfs_cid import COLLECTION_INFO, IPFS_CID_COLLECTION
from hedera_nft.mirror_client import MirrorTimeoutError, NftRecord
from hedera_nft.models import (
    Account,
    AccountBalance,
    BalanceCheck,
    BalancePair,
    MintResult,
    TransferResult,
    TransferSummary,
    TransferWorkflowResult,
    utc_now,
)

from . import ipfs_nft_demo


def account(account_id: str) -> Account:
    key = unittest.mock.MagicMock(name=f"key-{account_id}")
    return Account(account_id, key, key.public_key(), "SUCCESS", 100)


class Test(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        service_patcher = unittest.mock.patch.object(ipfs_nft_demo, "HederaNftService")
        mirror_patcher = unittest.mock.patch.object(ipfs_nft_demo, "MirrorNodeClient")
        url_patcher = unittest.mock.patch.object(
            ipfs_nft_demo, "MIRROR_NODE_URL", "https://testnet.mirrornode.hedera.com/api/v1"
        )
        stdout_patcher = unittest.mock.patch("sys.stdout")
        self.service = service_patcher.start().return_value
        self.mirror_class = mirror_patcher.start()
        self.mirror = self.mirror_class.return_value
        url_patcher.start()
        stdout_patcher.start()
        self.addCleanup(service_patcher.stop)
        self.addCleanup(mirror_patcher.stop)
        self.addCleanup(url_patcher.stop)
        self.addCleanup(stdout_patcher.stop)

        self.university = account("0.0.100")
        self.bob = account("0.0.101")
        self.token = unittest.mock.MagicMock(token_id="0.0.900")
        self.minted = MintResult([1, 2, 3, 4, 5], "SUCCESS", "0.0.900", utc_now())

        empty = AccountBalance("0.0.101", "150 ℏ")
        self.service.create_account = unittest.mock.AsyncMock(
            side_effect=[self.university, self.bob]
        )
        self.service.create_nft_token = unittest.mock.AsyncMock(return_value=self.token)
        self.service.mint_nfts = unittest.mock.AsyncMock(return_value=self.minted)
        self.service.get_account_balance = unittest.mock.AsyncMock(
            side_effect=[
                AccountBalance("0.0.100", "499 ℏ", {"0.0.900": "5"}),
                empty,
                AccountBalance("0.0.100", "498 ℏ", {"0.0.900": "4"}),
                AccountBalance("0.0.101", "149 ℏ", {"0.0.900": "1"}),
            ]
        )
        transfer = TransferResult("SUCCESS", "0.0.900", 1, "0.0.100", "0.0.101", utc_now())
        pair = BalancePair(empty, empty)
        self.service.transfer_nft_with_balance_check = unittest.mock.AsyncMock(
            return_value=TransferWorkflowResult(
                transfer,
                BalanceCheck(pair, pair),
                TransferSummary("0.0.900", 1, "0.0.100", "0.0.101", True),
            )
        )
        self.mirror.wait_for_nft_owner = unittest.mock.AsyncMock()
        self.mirror.account_nfts = unittest.mock.AsyncMock(
            return_value=[NftRecord("0.0.900", 1, "0.0.101", IPFS_CID_COLLECTION[0])]
        )
        self.mirror.close = unittest.mock.AsyncMock()

    async def test_demo_runs_every_step(self):
        result = await ipfs_nft_demo.main()

        self.service.create_account.assert_has_awaits(
            [unittest.mock.call(500), unittest.mock.call(150)]
        )
        self.service.create_nft_token.assert_awaited_once_with(
            self.university, COLLECTION_INFO
        )
        self.service.mint_nfts.assert_awaited_once_with(self.token, IPFS_CID_COLLECTION)
        self.service.transfer_nft_with_balance_check.assert_awaited_once_with(
            "0.0.900", self.university, self.bob, 1
        )
        self.mirror.wait_for_nft_owner.assert_awaited_once()
        self.assertEqual(self.mirror.account_nfts.await_count, 2)
        self.assertIs(result["bob"], self.bob)
        self.assertIs(result["mint_result"], self.minted)
        self.assertTrue(result["transfer_result"].summary.success)
        self.service.close.assert_called_once()
        self.mirror.close.assert_awaited_once()

    async def test_mirror_lag_does_not_fail_demo(self):
        self.mirror.wait_for_nft_owner.side_effect = MirrorTimeoutError("late", 20)
        result = await ipfs_nft_demo.main()
        self.assertIsNotNone(result)
        self.mirror.account_nfts.assert_not_awaited()

    async def test_without_mirror_node_url(self):
        with unittest.mock.patch.object(ipfs_nft_demo, "MIRROR_NODE_URL", None):
            result = await ipfs_nft_demo.main()
        self.assertIsNotNone(result)
        self.mirror_class.assert_not_called()
        self.service.close.assert_called_once()

    async def test_errors_are_printed_and_client_closed(self):
        self.service.mint_nfts.side_effect = RuntimeError("INSUFFICIENT_PAYER_BALANCE")
        result = await ipfs_nft_demo.main()
        self.assertIsNone(result)
        self.service.transfer_nft_with_balance_check.assert_not_awaited()
        self.service.close.assert_called_once()
        self.mirror.close.assert_awaited_once()


if __name__ == "__main__":
    unittest.main()
