# SPDX-License-Identifier: Apache-2.0

"""
Command-line access to the individual NFT operations.

The demo script runs every step in a fixed order. This module runs one step
at a time, which is handy for inspecting a collection created earlier or for
moving an NFT between accounts whose keys you already hold. Operator
credentials come from ``.env`` or the environment, see
:mod:`hedera_nft.config`.

Supported Commands:
- create-account: Create a funded account and print its id and key
- create-collection: Create a treasury account and an NFT token, optionally
  minting the bundled IPFS collection
- balance: Print the HBAR and token balances of an account
- token-info: Print the essential fields of a token
- transfer: Move one NFT between two accounts

Examples:
    Create a collection and mint the bundled CIDs::

        python -m hedera_nft.cli create-collection --name Diplomas --symbol DIP --mint-ipfs

    Move serial 1 to another account::

        python -m hedera_nft.cli transfer \
            --token 0.0.5678 --serial 1 \
            --from-account 0.0.1001 --from-key 302e... \
            --to-account 0.0.1002 --to-key 302e...
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import unittest
import unittest.mock
from typing import List

from .ipfs_cid import IPFS_CID_COLLECTION
from .models import Account, AccountBalance, TokenBasicInfo
from .nft_service import HederaNftService

COMMANDS = ["create-account", "create-collection", "balance", "token-info", "transfer"]


def account_arg(parsed_args: argparse.Namespace, prefix: str) -> Account:
    return Account.from_strings(
        getattr(parsed_args, f"{prefix}_account"), getattr(parsed_args, f"{prefix}_key")
    )


async def run(parsed_args: argparse.Namespace, service: HederaNftService):
    if parsed_args.command == "create-account":
        account = await service.create_account(parsed_args.initial_balance)
        print(f"Account ID:  {account.account_id}")
        print(f"Private key: {account.private_key.to_string()}")
        print(f"Public key:  {account.public_key.to_string()}")
    elif parsed_args.command == "create-collection":
        token_config = {
            key: value
            for key, value in (
                ("name", parsed_args.name),
                ("symbol", parsed_args.symbol),
                ("max_supply", parsed_args.max_supply),
            )
            if value is not None
        }
        metadata = IPFS_CID_COLLECTION if parsed_args.mint_ipfs else None
        result = await service.create_complete_nft_collection(
            token_config, metadata, parsed_args.initial_balance
        )
        print(f"Treasury account: {result.summary.account_id}")
        print(f"Treasury key:     {result.account.private_key.to_string()}")
        print(f"Token ID:         {result.summary.token_id}")
        print(f"NFTs minted:      {result.summary.nft_count}")
        if result.summary.serials:
            print(f"Serials:          {', '.join(result.summary.serials)}")
    elif parsed_args.command == "balance":
        print_balance(await service.get_account_balance(parsed_args.account))
    elif parsed_args.command == "token-info":
        print_token_info(await service.get_token_basic_info(parsed_args.token))
    elif parsed_args.command == "transfer":
        result = await service.transfer_nft_with_balance_check(
            parsed_args.token,
            account_arg(parsed_args, "from"),
            account_arg(parsed_args, "to"),
            parsed_args.serial,
        )
        print(f"Status: {result.transfer_result.status}")
        print_balance(result.balances.after.sender)
        print_balance(result.balances.after.receiver)


def print_balance(balance: AccountBalance):
    print(f"Account {balance.account_id}")
    print(f"  HBAR:   {balance.hbar_balance}")
    print(f"  Tokens: {balance.tokens_or_none()}")


def print_token_info(info: TokenBasicInfo):
    print(f"Token {info.token_id}: {info.name} ({info.symbol})")
    print(f"  Type:         {info.type}")
    print(f"  Total supply: {info.total_supply}")
    print(f"  Max supply:   {info.max_supply}")
    print(f"  Treasury:     {info.treasury}")


async def main(args: List[str]):
    """
    Parse ``args`` and run one command against the configured network.

    Missing arguments are reported through ``parser.error``, which exits with
    status 2 before any client is created.
    """
    parser = argparse.ArgumentParser(description="Hedera NFT demo CLI")
    parser.add_argument(
        "command", type=str, help="The command to execute", choices=COMMANDS
    )
    parser.add_argument("--account", help="Account id to query", type=str)
    parser.add_argument("--token", help="Token id", type=str)
    parser.add_argument("--serial", help="NFT serial number", type=int)
    parser.add_argument("--from-account", help="Sender account id", type=str)
    parser.add_argument("--from-key", help="Sender private key", type=str)
    parser.add_argument("--to-account", help="Receiver account id", type=str)
    parser.add_argument("--to-key", help="Receiver private key", type=str)
    parser.add_argument("--name", help="Token name", type=str)
    parser.add_argument("--symbol", help="Token symbol", type=str)
    parser.add_argument("--max-supply", help="Maximum number of NFTs", type=int)
    parser.add_argument(
        "--initial-balance",
        help="Starting HBAR balance of new accounts",
        type=int,
        default=100,
    )
    parser.add_argument(
        "--mint-ipfs",
        help="Mint the bundled IPFS collection into the new token",
        action="store_true",
    )
    parser.add_argument("--log-level", help="Logging level", default="INFO")
    parsed_args = parser.parse_args(args)

    if parsed_args.command == "balance" and parsed_args.account is None:
        parser.error("Missing required argument '--account'")
    if parsed_args.command in ("token-info", "transfer") and parsed_args.token is None:
        parser.error("Missing required argument '--token'")
    if parsed_args.command == "transfer":
        for name in ("serial", "from_account", "from_key", "to_account", "to_key"):
            if getattr(parsed_args, name) is None:
                parser.error(
                    f"Missing required argument '--{name.replace('_', '-')}'"
                )

    logging.basicConfig(
        level=parsed_args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    async with HederaNftService() as service:
        await run(parsed_args, service)


def run_cli():
    asyncio.run(main(sys.argv[1:]))


class Test(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        patcher = unittest.mock.patch("hedera_nft.cli.HederaNftService")
        self.service_class = patcher.start()
        self.addCleanup(patcher.stop)
        self.service = self.service_class.return_value.__aenter__.return_value
        stdout = unittest.mock.patch("sys.stdout")
        stdout.start()
        self.addCleanup(stdout.stop)

    async def test_balance(self):
        self.service.get_account_balance = unittest.mock.AsyncMock(
            return_value=AccountBalance("0.0.100", "5 ℏ")
        )
        await main(["balance", "--account", "0.0.100"])
        self.service.get_account_balance.assert_awaited_once_with("0.0.100")
        self.service_class.return_value.__aexit__.assert_awaited_once()

    async def test_token_info(self):
        self.service.get_token_basic_info = unittest.mock.AsyncMock(
            return_value=TokenBasicInfo("0.0.900", "d", "G", "NFT", "1", "250", "0.0.100")
        )
        await main(["token-info", "--token", "0.0.900"])
        self.service.get_token_basic_info.assert_awaited_once_with("0.0.900")

    async def test_create_collection_with_ipfs(self):
        self.service.create_complete_nft_collection = unittest.mock.AsyncMock()
        result = self.service.create_complete_nft_collection.return_value
        result.summary.serials = ["1", "2"]
        await main(["create-collection", "--symbol", "DIP", "--mint-ipfs"])
        self.service.create_complete_nft_collection.assert_awaited_once_with(
            {"symbol": "DIP"}, IPFS_CID_COLLECTION, 100
        )

    async def test_create_collection_without_mint(self):
        self.service.create_complete_nft_collection = unittest.mock.AsyncMock()
        self.service.create_complete_nft_collection.return_value.summary.serials = []
        await main(
            ["create-collection", "--max-supply", "10", "--initial-balance", "20"]
        )
        self.service.create_complete_nft_collection.assert_awaited_once_with(
            {"max_supply": 10}, None, 20
        )

    async def test_transfer(self):
        self.service.transfer_nft_with_balance_check = unittest.mock.AsyncMock()
        with unittest.mock.patch.object(Account, "from_strings") as from_strings:
            await main(
                [
                    "transfer", "--token", "0.0.900", "--serial", "1",
                    "--from-account", "0.0.100", "--from-key", "k1",
                    "--to-account", "0.0.101", "--to-key", "k2",
                ]
            )
        from_strings.assert_has_calls(
            [unittest.mock.call("0.0.100", "k1"), unittest.mock.call("0.0.101", "k2")]
        )
        args = self.service.transfer_nft_with_balance_check.await_args.args
        self.assertEqual(args[0], "0.0.900")
        self.assertEqual(args[3], 1)

    async def test_missing_arguments(self):
        with unittest.mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                await main(["balance"])
            with self.assertRaises(SystemExit):
                await main(["transfer", "--token", "0.0.900", "--serial", "1"])
        self.service_class.assert_not_called()


if __name__ == "__main__":
    run_cli()
