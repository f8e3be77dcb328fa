# SPDX-License-Identifier: Apache-2.0

"""
NFT operations on Hedera through the ``hiero-sdk-python`` SDK.

:class:`HederaNftService` exposes one coroutine per ledger action (create an
account, create a token, mint, associate, transfer, query balances and token
info) plus two workflows that chain them. Each action builds a request,
submits it on a single shared client, waits for the receipt and reshapes the
receipt into a record from :mod:`hedera_nft.models`.

The SDK is synchronous. Requests run in a worker thread so the event loop
stays free while a node is waiting for consensus. Calls are still awaited
one after another; the service never submits in parallel.

Examples:
    Create a collection and mint two NFTs::

        import asyncio
        from hedera_nft.nft_service import HederaNftService

        async def main():
            async with HederaNftService() as service:
                result = await service.create_complete_nft_collection(
                    {"name": "Diplomas", "symbol": "DIP"},
                    ["ipfs://bafkrei...1", "ipfs://bafkrei...2"],
                )
                print(result.summary)

        asyncio.run(main())

Error Handling:
    Every operation logs a failure and re-raises the original exception.
    A receipt carrying a status other than ``SUCCESS`` raises
    :class:`ReceiptStatusError`; its message contains the status name, so
    callers can match on it like on SDK errors.
"""

from __future__ import annotations

import asyncio
import json
import logging
import unittest
import unittest.mock
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Union

from hiero_sdk_python import (
    AccountCreateTransaction,
    AccountId,
    Client,
    CryptoGetAccountBalanceQuery,
    Hbar,
    Network,
    NftId,
    PrivateKey,
    ResponseCode,
    SupplyType,
    TokenAssociateTransaction,
    TokenCreateTransaction,
    TokenId,
    TokenInfoQuery,
    TokenMintTransaction,
    TokenType,
    TransferTransaction,
)

from . import config
from .config import ServiceConfig
from .models import (
    Account,
    AccountBalance,
    AssociationResult,
    BalanceCheck,
    BalancePair,
    CollectionResult,
    CollectionSummary,
    MintResult,
    Token,
    TokenBasicInfo,
    TokenConfig,
    TransferResult,
    TransferSummary,
    TransferWorkflowResult,
    utc_now,
)

logger = logging.getLogger(__name__)

ALREADY_ASSOCIATED = "TOKEN_ALREADY_ASSOCIATED"


def status_name(status: Any) -> str:
    """Name of a ledger response code, e.g. ``"SUCCESS"``."""
    if status is None:
        return "UNKNOWN"
    try:
        return ResponseCode(status).name
    except ValueError:
        return str(status)


class HederaNftService:
    """Thin async wrapper over the Hedera SDK for NFT collections.

    The client handle is created on first use and shared by every call until
    :meth:`close`. The service can be used as an async context manager, which
    closes the client on exit.

    Attributes:
        operator_id: Account id paying for all transactions
        operator_key: Private key string of the operator
        network: Hedera network name
        service_config: Fee ceilings applied to transactions
    """

    operator_id: str
    operator_key: str
    network: str
    service_config: ServiceConfig
    client: Optional[Client]

    def __init__(
        self,
        operator_id: Optional[str] = None,
        operator_key: Optional[str] = None,
        network: Optional[str] = None,
        service_config: Optional[ServiceConfig] = None,
    ):
        self.operator_id = operator_id or config.OPERATOR_ID
        self.operator_key = operator_key or config.OPERATOR_KEY
        self.network = network or config.HEDERA_NETWORK
        self.service_config = service_config or ServiceConfig()
        self.client = None

        if not self.operator_id or not self.operator_key:
            raise ValueError("Please set OPERATOR_ID and OPERATOR_KEY in your .env file")

        logger.info("HederaNftService initialized")

    async def __aenter__(self) -> HederaNftService:
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    def get_client(self) -> Client:
        """
        Return the shared client, connecting it on first use.

        :return: A client with the operator set for the configured network
        """
        if self.client is None:
            client = Client(Network(network=self.network))
            client.set_operator(
                AccountId.from_string(self.operator_id),
                PrivateKey.from_string(self.operator_key),
            )
            client.set_default_max_query_payment(
                Hbar(self.service_config.max_query_payment)
            )
            self.client = client
            logger.info(f"Hedera client connected to {self.network}")
        return self.client

    def close(self) -> None:
        """Close the shared client. Does nothing when no client was opened."""
        if self.client is not None:
            self.client.close()
            self.client = None
            logger.info("Hedera client closed")

    #
    # Submission helpers
    #

    def _set_max_fee(self, transaction: Any) -> None:
        # Must happen before the transaction is frozen.
        transaction.transaction_fee = Hbar(
            self.service_config.max_transaction_fee
        ).to_tinybars()

    async def _submit(self, transaction: Any) -> Any:
        """Execute a transaction and return its receipt if it succeeded."""
        receipt = await asyncio.to_thread(transaction.execute, self.get_client())
        name = status_name(receipt.status)
        if name != "SUCCESS":
            raise ReceiptStatusError(
                f"Transaction failed with status {name}", receipt.status
            )
        return receipt

    async def _query(self, query: Any) -> Any:
        return await asyncio.to_thread(query.execute, self.get_client())

    #
    # Ledger operations
    #

    async def create_account(self, initial_balance: int = 100) -> Account:
        """
        Create a new account controlled by a freshly generated ED25519 key.

        :param initial_balance: Starting balance in HBAR, paid by the operator
        :return: The new account with its key pair
        """
        try:
            logger.info("Creating account...")

            private_key = PrivateKey.generate_ed25519()
            public_key = private_key.public_key()

            transaction = (
                AccountCreateTransaction()
                .set_key(public_key)
                .set_initial_balance(Hbar(initial_balance))
            )
            self._set_max_fee(transaction)
            receipt = await self._submit(transaction)

            account = Account(
                account_id=receipt.account_id,
                private_key=private_key,
                public_key=public_key,
                status=status_name(receipt.status),
                balance=initial_balance,
            )
            logger.info(
                f"Account created: {account.account_id} "
                f"(status {account.status}, balance {initial_balance} HBAR)"
            )
            return account
        except Exception as e:
            logger.error(f"Error creating account: {e}")
            raise

    async def create_nft_token(
        self,
        treasury_account: Account,
        token_config: Optional[Union[TokenConfig, Dict[str, Any]]] = None,
    ) -> Token:
        """
        Create a finite non-fungible token held and minted by ``treasury_account``.

        The token starts with zero supply. The treasury key doubles as the
        supply key, so the treasury is the only account able to mint. After
        creation the token is read back with an info query so the returned
        record reflects what the ledger stored.

        :param treasury_account: Account from :meth:`create_account`
        :param token_config: Overrides for name, symbol and max supply
        :return: The created token
        """
        try:
            client = self.get_client()
            token_config = TokenConfig.from_overrides(token_config)

            logger.info(
                f"Creating NFT token {token_config.name} ({token_config.symbol}), "
                f"max supply {token_config.max_supply}"
            )

            transaction = (
                TokenCreateTransaction()
                .set_token_name(token_config.name)
                .set_token_symbol(token_config.symbol)
                .set_token_type(TokenType.NON_FUNGIBLE_UNIQUE)
                .set_decimals(0)
                .set_initial_supply(0)
                .set_treasury_account_id(treasury_account.account_id)
                .set_supply_type(SupplyType.FINITE)
                .set_max_supply(token_config.max_supply)
                .set_supply_key(treasury_account.private_key)
            )
            self._set_max_fee(transaction)
            transaction.freeze_with(client)
            transaction.sign(treasury_account.private_key)
            receipt = await self._submit(transaction)

            token_id = receipt.token_id
            status = status_name(receipt.status)
            logger.info(f"NFT token created: {token_id} (status {status})")

            logger.info("Fetching token information...")
            info = await self._query(TokenInfoQuery().set_token_id(token_id))
            logger.info(
                f"Token {info.name} ({info.symbol}): type {info.token_type}, "
                f"max supply {info.max_supply}, treasury {info.treasury}"
            )

            return Token(
                token_id=token_id,
                status=status,
                name=info.name,
                symbol=info.symbol,
                token_type=info.token_type,
                decimals=info.decimals,
                total_supply=info.total_supply,
                max_supply=info.max_supply,
                supply_type=info.supply_type,
                treasury_account_id=info.treasury,
                supply_key=info.supply_key,
                treasury_account=treasury_account,
            )
        except Exception as e:
            logger.error(f"Error creating NFT token: {e}")
            raise

    async def mint_nfts(self, token: Token, metadata: Union[Any, List[Any]]) -> MintResult:
        """
        Mint one NFT per metadata item into the token's treasury.

        Strings are stored as UTF-8 bytes, bytes are stored as-is and anything
        else is JSON-encoded first.

        :param token: Token from :meth:`create_nft_token`
        :param metadata: A single metadata item, or a list or tuple of them
        :return: Serial numbers assigned by the ledger
        """
        try:
            client = self.get_client()
            items = metadata if isinstance(metadata, (list, tuple)) else [metadata]

            logger.info(f"Minting {len(items)} NFT(s)...")

            transaction = (
                TokenMintTransaction()
                .set_token_id(token.token_id)
                .set_metadata([encode_metadata(item) for item in items])
            )
            self._set_max_fee(transaction)
            transaction.freeze_with(client)
            transaction.sign(token.treasury_account.private_key)
            receipt = await self._submit(transaction)

            serials = list(receipt.serial_numbers or [])
            logger.info(f"NFT(s) minted, serial numbers: {serials}")

            return MintResult(
                serials=serials,
                status=status_name(receipt.status),
                token_id=token.token_id,
                minted_at=utc_now(),
            )
        except Exception as e:
            logger.error(f"Error minting NFTs: {e}")
            raise

    async def get_token_basic_info(self, token_id: Union[TokenId, str]) -> TokenBasicInfo:
        """
        Fetch the essential fields of a token.

        :param token_id: Token id or its ``shard.realm.num`` string
        :return: Token fields as strings
        """
        try:
            if isinstance(token_id, str):
                token_id = TokenId.from_string(token_id)
            logger.info(f"Getting token info for {token_id}")

            info = await self._query(TokenInfoQuery().set_token_id(token_id))

            return TokenBasicInfo(
                token_id=_str_or_none(info.token_id),
                name=info.name,
                symbol=info.symbol,
                type=_str_or_none(info.token_type),
                total_supply=_str_or_none(info.total_supply),
                max_supply=_str_or_none(info.max_supply),
                treasury=_str_or_none(info.treasury),
            )
        except Exception as e:
            logger.error(f"Error getting token basic info: {e}")
            raise

    async def associate_token_to_account(
        self, account: Account, token_id: Union[TokenId, str]
    ) -> AssociationResult:
        """
        Associate ``token_id`` with ``account``; required before it can
        receive the token.

        :param account: Account to associate, signs the transaction
        :param token_id: Token to associate or its id string
        """
        try:
            client = self.get_client()
            if isinstance(token_id, str):
                token_id = TokenId.from_string(token_id)
            logger.info(f"Associating token {token_id} to account {account.account_id}")

            transaction = (
                TokenAssociateTransaction()
                .set_account_id(account.account_id)
                .add_token_id(token_id)
            )
            self._set_max_fee(transaction)
            transaction.freeze_with(client)
            transaction.sign(account.private_key)
            receipt = await self._submit(transaction)

            status = status_name(receipt.status)
            logger.info(f"Token association successful (status {status})")

            return AssociationResult(
                status=status,
                account_id=account.account_id,
                token_id=token_id,
                associated_at=utc_now(),
            )
        except Exception as e:
            logger.error(f"Error associating token to account: {e}")
            raise

    async def get_account_balance(
        self, account: Union[Account, AccountId, str]
    ) -> AccountBalance:
        """
        Fetch the HBAR and token balances of an account.

        :param account: An :class:`Account`, an ``AccountId`` or an id string
        :return: Balances with token ids and amounts as strings
        """
        try:
            if isinstance(account, Account):
                account_id = account.account_id
            elif isinstance(account, str):
                account_id = AccountId.from_string(account)
            else:
                account_id = account

            logger.info(f"Getting balance for account {account_id}")

            balance = await self._query(
                CryptoGetAccountBalanceQuery().set_account_id(account_id)
            )
            tokens = {
                str(token): str(amount)
                for token, amount in (balance.token_balances or {}).items()
            }
            result = AccountBalance(
                account_id=str(account_id),
                hbar_balance=str(balance.hbars),
                tokens=tokens,
            )

            logger.info(f"HBAR: {result.hbar_balance}, tokens: {result.tokens_or_none()}")
            return result
        except Exception as e:
            logger.error(f"Error getting account balance: {e}")
            raise

    async def transfer_nft(
        self,
        token_id: Union[TokenId, str],
        from_account: Account,
        to_account: Account,
        serial_number: int,
    ) -> TransferResult:
        """
        Move one NFT between two accounts.

        Both the sender and the receiver sign, which also satisfies a
        receiver-signature requirement on the receiving account.

        :param token_id: Token of the NFT or its id string
        :param from_account: Current owner
        :param to_account: New owner, already associated with the token
        :param serial_number: Serial of the NFT to move
        """
        try:
            client = self.get_client()
            if isinstance(token_id, str):
                token_id = TokenId.from_string(token_id)
            logger.info(
                f"Transferring NFT {token_id} #{serial_number} "
                f"from {from_account.account_id} to {to_account.account_id}"
            )

            transaction = TransferTransaction().add_nft_transfer(
                NftId(token_id, serial_number),
                from_account.account_id,
                to_account.account_id,
            )
            self._set_max_fee(transaction)
            transaction.freeze_with(client)
            transaction.sign(from_account.private_key)
            transaction.sign(to_account.private_key)
            receipt = await self._submit(transaction)

            status = status_name(receipt.status)
            logger.info(f"NFT transfer successful (status {status})")

            return TransferResult(
                status=status,
                token_id=token_id,
                serial_number=serial_number,
                from_account=str(from_account.account_id),
                to_account=str(to_account.account_id),
                transferred_at=utc_now(),
            )
        except Exception as e:
            logger.error(f"Error transferring NFT: {e}")
            raise

    #
    # Workflows
    #

    async def transfer_nft_with_balance_check(
        self,
        token_id: Union[TokenId, str],
        from_account: Account,
        to_account: Account,
        serial_number: int,
    ) -> TransferWorkflowResult:
        """
        Transfer an NFT, associating the receiver first and recording both
        accounts' balances before and after.

        An association error mentioning ``TOKEN_ALREADY_ASSOCIATED`` is not
        fatal; any other error stops the workflow.

        :param token_id: Token of the NFT or its id string
        :param from_account: Current owner
        :param to_account: New owner
        :param serial_number: Serial of the NFT to move
        """
        try:
            if isinstance(token_id, str):
                token_id = TokenId.from_string(token_id)
            logger.info("Starting NFT transfer with balance checks")

            before = BalancePair(
                sender=await self.get_account_balance(from_account),
                receiver=await self.get_account_balance(to_account),
            )

            try:
                await self.associate_token_to_account(to_account, token_id)
            except Exception as e:
                if ALREADY_ASSOCIATED not in str(e):
                    raise
                logger.info("Token already associated to receiver account")

            transfer_result = await self.transfer_nft(
                token_id, from_account, to_account, serial_number
            )

            after = BalancePair(
                sender=await self.get_account_balance(from_account),
                receiver=await self.get_account_balance(to_account),
            )

            summary = TransferSummary(
                token_id=str(token_id),
                serial_number=serial_number,
                sender=str(from_account.account_id),
                receiver=str(to_account.account_id),
                success=transfer_result.status == "SUCCESS",
            )
            logger.info(
                f"Transfer completed: {summary.token_id} #{summary.serial_number} "
                f"{summary.sender} -> {summary.receiver}, success {summary.success}"
            )

            return TransferWorkflowResult(
                transfer_result=transfer_result,
                balances=BalanceCheck(before=before, after=after),
                summary=summary,
            )
        except Exception as e:
            logger.error(f"Error in transfer workflow: {e}")
            raise

    async def create_complete_nft_collection(
        self,
        token_config: Optional[Union[TokenConfig, Dict[str, Any]]] = None,
        metadata: Optional[List[Any]] = None,
        initial_balance: int = 100,
    ) -> CollectionResult:
        """
        Create a treasury account and a token, then mint ``metadata`` into it.

        Minting is skipped when ``metadata`` is empty.

        :param token_config: Overrides for name, symbol and max supply
        :param metadata: One metadata item per NFT to mint
        :param initial_balance: Treasury starting balance in HBAR
        """
        try:
            logger.info("Starting complete NFT workflow")

            account = await self.create_account(initial_balance)
            token = await self.create_nft_token(account, token_config)

            mint_result = None
            if metadata:
                mint_result = await self.mint_nfts(token, metadata)

            summary = CollectionSummary(
                account_id=str(account.account_id),
                token_id=str(token.token_id),
                nft_count=mint_result.count if mint_result else 0,
                serials=[str(s) for s in mint_result.serials] if mint_result else [],
            )
            logger.info(
                f"Workflow completed: account {summary.account_id}, "
                f"token {summary.token_id}, {summary.nft_count} NFT(s) minted"
            )

            return CollectionResult(
                account=account,
                token=token,
                mint_result=mint_result,
                summary=summary,
            )
        except Exception as e:
            logger.error(f"Error in complete workflow: {e}")
            raise


def encode_metadata(item: Any) -> bytes:
    if isinstance(item, bytes):
        return item
    if isinstance(item, str):
        return item.encode("utf-8")
    return json.dumps(item).encode("utf-8")


def _str_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class ReceiptStatusError(Exception):
    """A transaction reached consensus with a status other than SUCCESS"""

    status: Any

    def __init__(self, message: str, status: Any):
        # Call the base class constructor with the parameters it needs
        super().__init__(message)
        self.status = status


def _builder(*setters: str) -> unittest.mock.MagicMock:
    """A request mock whose setters return the request itself."""
    request = unittest.mock.MagicMock()
    for setter in setters:
        getattr(request, setter).return_value = request
    return request


def _receipt(**kwargs) -> SimpleNamespace:
    kwargs.setdefault("status", ResponseCode.SUCCESS)
    return SimpleNamespace(**kwargs)


class Test(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.patchers = {
            name: unittest.mock.patch(f"hedera_nft.nft_service.{name}")
            for name in (
                "AccountCreateTransaction",
                "Client",
                "CryptoGetAccountBalanceQuery",
                "Network",
                "PrivateKey",
                "TokenAssociateTransaction",
                "TokenCreateTransaction",
                "TokenInfoQuery",
                "TokenMintTransaction",
                "TransferTransaction",
            )
        }
        self.mocks = {name: p.start() for name, p in self.patchers.items()}
        self.service = HederaNftService("0.0.2", "302e020100300506032b6570")

    def tearDown(self):
        for patcher in self.patchers.values():
            patcher.stop()

    def account(self, account_id: str) -> Account:
        key = unittest.mock.MagicMock(name=f"key-{account_id}")
        return Account(account_id, key, key.public_key(), "SUCCESS", 100)

    def token(self) -> Token:
        return Token(
            "0.0.900", "SUCCESS", "diploma", "GRAD", "NON_FUNGIBLE_UNIQUE",
            0, 0, 250, "FINITE", "0.0.100", None, self.account("0.0.100"),
        )

    def test_missing_credentials(self):
        with unittest.mock.patch.multiple(
            "hedera_nft.config", OPERATOR_ID=None, OPERATOR_KEY=None
        ):
            with self.assertRaises(ValueError):
                HederaNftService()
            with self.assertRaises(ValueError):
                HederaNftService(operator_id="0.0.2")

    def test_client_is_created_once_and_closed(self):
        first = self.service.get_client()
        second = self.service.get_client()
        self.assertIs(first, second)
        self.assertEqual(self.mocks["Client"].call_count, 1)
        self.mocks["Network"].assert_called_once_with(network="testnet")
        first.set_operator.assert_called_once()
        first.set_default_max_query_payment.assert_called_once_with(Hbar(30))

        self.service.close()
        first.close.assert_called_once()
        self.assertIsNone(self.service.client)
        self.service.close()
        first.close.assert_called_once()

    async def test_context_manager_closes(self):
        async with self.service as service:
            client = service.get_client()
        client.close.assert_called_once()

    async def test_create_account(self):
        transaction = _builder("set_key", "set_initial_balance")
        transaction.execute.return_value = _receipt(account_id="0.0.1001")
        self.mocks["AccountCreateTransaction"].return_value = transaction
        private_key = self.mocks["PrivateKey"].generate_ed25519.return_value

        account = await self.service.create_account(500)

        self.assertEqual(account.account_id, "0.0.1001")
        self.assertEqual(account.status, "SUCCESS")
        self.assertEqual(account.balance, 500)
        self.assertIs(account.private_key, private_key)
        transaction.set_key.assert_called_once_with(private_key.public_key())
        transaction.set_initial_balance.assert_called_once_with(Hbar(500))
        self.assertEqual(transaction.transaction_fee, Hbar(50).to_tinybars())

    async def test_create_nft_token(self):
        treasury = self.account("0.0.100")
        transaction = _builder(
            "set_token_name", "set_token_symbol", "set_token_type", "set_decimals",
            "set_initial_supply", "set_treasury_account_id", "set_supply_type",
            "set_max_supply", "set_supply_key",
        )
        transaction.execute.return_value = _receipt(token_id="0.0.900")
        self.mocks["TokenCreateTransaction"].return_value = transaction
        query = _builder("set_token_id")
        query.execute.return_value = SimpleNamespace(
            token_id="0.0.900", name="Diplomas", symbol="GRAD",
            token_type="NON_FUNGIBLE_UNIQUE", decimals=0, total_supply=0,
            max_supply=10, supply_type="FINITE", treasury="0.0.100", supply_key="k",
        )
        self.mocks["TokenInfoQuery"].return_value = query

        token = await self.service.create_nft_token(
            treasury, {"name": "Diplomas", "max_supply": 10}
        )

        transaction.set_token_name.assert_called_once_with("Diplomas")
        transaction.set_token_symbol.assert_called_once_with("GRAD")
        transaction.set_token_type.assert_called_once_with(TokenType.NON_FUNGIBLE_UNIQUE)
        transaction.set_supply_type.assert_called_once_with(SupplyType.FINITE)
        transaction.set_max_supply.assert_called_once_with(10)
        transaction.set_supply_key.assert_called_once_with(treasury.private_key)
        transaction.sign.assert_called_once_with(treasury.private_key)
        query.set_token_id.assert_called_once_with("0.0.900")
        self.assertEqual(token.token_id, "0.0.900")
        self.assertEqual(token.name, "Diplomas")
        self.assertEqual(token.treasury_account_id, "0.0.100")
        self.assertIs(token.treasury_account, treasury)

    async def test_mint_single_and_json_metadata(self):
        transaction = _builder("set_token_id", "set_metadata")
        transaction.execute.return_value = _receipt(serial_numbers=[1, 2])
        self.mocks["TokenMintTransaction"].return_value = transaction
        token = self.token()

        result = await self.service.mint_nfts(token, ["ipfs://a", {"n": 1}])

        transaction.set_metadata.assert_called_once_with([b"ipfs://a", b'{"n": 1}'])
        transaction.sign.assert_called_once_with(token.treasury_account.private_key)
        self.assertEqual(result.serials, [1, 2])
        self.assertEqual(result.count, 2)
        self.assertEqual(result.token_id, "0.0.900")

        transaction.set_metadata.reset_mock()
        await self.service.mint_nfts(token, "ipfs://b")
        transaction.set_metadata.assert_called_once_with([b"ipfs://b"])

    async def test_failed_receipt_raises(self):
        transaction = _builder("set_token_id", "set_metadata")
        transaction.execute.return_value = _receipt(
            status=ResponseCode.INVALID_SIGNATURE, serial_numbers=[]
        )
        self.mocks["TokenMintTransaction"].return_value = transaction

        with self.assertRaises(ReceiptStatusError) as ctx:
            await self.service.mint_nfts(self.token(), ["ipfs://a"])
        self.assertIn("INVALID_SIGNATURE", str(ctx.exception))

    async def test_sdk_error_is_reraised_unchanged(self):
        error = RuntimeError("node unavailable")
        transaction = _builder("set_key", "set_initial_balance")
        transaction.execute.side_effect = error
        self.mocks["AccountCreateTransaction"].return_value = transaction

        with self.assertLogs("hedera_nft.nft_service", level="ERROR"):
            with self.assertRaises(RuntimeError) as ctx:
                await self.service.create_account()
        self.assertIs(ctx.exception, error)

    async def test_get_token_basic_info(self):
        query = _builder("set_token_id")
        query.execute.return_value = SimpleNamespace(
            token_id="0.0.900", name="diploma", symbol="GRAD",
            token_type="NON_FUNGIBLE_UNIQUE", total_supply=5, max_supply=250,
            treasury="0.0.100",
        )
        self.mocks["TokenInfoQuery"].return_value = query

        info = await self.service.get_token_basic_info(TokenId(0, 0, 900))

        self.assertEqual(
            info,
            TokenBasicInfo("0.0.900", "diploma", "GRAD", "NON_FUNGIBLE_UNIQUE", "5", "250", "0.0.100"),
        )

    async def test_get_account_balance(self):
        query = _builder("set_account_id")
        query.execute.return_value = SimpleNamespace(
            hbars="499.5 ℏ", token_balances={"0.0.900": 4}
        )
        self.mocks["CryptoGetAccountBalanceQuery"].return_value = query

        balance = await self.service.get_account_balance(self.account("0.0.100"))
        self.assertEqual(balance.account_id, "0.0.100")
        self.assertEqual(balance.hbar_balance, "499.5 ℏ")
        self.assertEqual(balance.tokens, {"0.0.900": "4"})

        query.execute.return_value = SimpleNamespace(hbars="1 ℏ", token_balances={})
        balance = await self.service.get_account_balance("0.0.101")
        query.set_account_id.assert_called_with(AccountId(0, 0, 101))
        self.assertEqual(balance.tokens, {})

    async def test_transfer_nft_signed_by_both(self):
        sender, receiver = self.account("0.0.100"), self.account("0.0.101")
        transaction = _builder("add_nft_transfer")
        transaction.execute.return_value = _receipt()
        self.mocks["TransferTransaction"].return_value = transaction

        result = await self.service.transfer_nft("0.0.900", sender, receiver, 1)

        transaction.add_nft_transfer.assert_called_once_with(
            NftId(TokenId(0, 0, 900), 1), "0.0.100", "0.0.101"
        )
        transaction.sign.assert_has_calls(
            [unittest.mock.call(sender.private_key), unittest.mock.call(receiver.private_key)]
        )
        self.assertEqual(result.status, "SUCCESS")
        self.assertEqual(result.from_account, "0.0.100")
        self.assertEqual(result.to_account, "0.0.101")
        self.assertEqual(result.token_id, TokenId(0, 0, 900))

    async def test_transfer_workflow_tolerates_existing_association(self):
        sender, receiver = self.account("0.0.100"), self.account("0.0.101")
        balances = [
            AccountBalance("0.0.100", "1 ℏ", {"0.0.900": "5"}),
            AccountBalance("0.0.101", "1 ℏ"),
            AccountBalance("0.0.100", "1 ℏ", {"0.0.900": "4"}),
            AccountBalance("0.0.101", "1 ℏ", {"0.0.900": "1"}),
        ]
        transfer = TransferResult("SUCCESS", "0.0.900", 1, "0.0.100", "0.0.101", utc_now())
        with unittest.mock.patch.multiple(
            self.service,
            get_account_balance=unittest.mock.AsyncMock(side_effect=balances),
            associate_token_to_account=unittest.mock.AsyncMock(
                side_effect=ReceiptStatusError(
                    "Transaction failed with status TOKEN_ALREADY_ASSOCIATED_TO_ACCOUNT",
                    ResponseCode.TOKEN_ALREADY_ASSOCIATED_TO_ACCOUNT,
                )
            ),
            transfer_nft=unittest.mock.AsyncMock(return_value=transfer),
        ):
            result = await self.service.transfer_nft_with_balance_check(
                "0.0.900", sender, receiver, 1
            )

        self.assertIs(result.transfer_result, transfer)
        self.assertEqual(result.balances.before.sender.token_amount(), 5)
        self.assertEqual(result.balances.after.receiver.token_amount(), 1)
        self.assertEqual(
            result.summary,
            TransferSummary("0.0.900", 1, "0.0.100", "0.0.101", True),
        )

    async def test_transfer_workflow_stops_on_other_association_error(self):
        sender, receiver = self.account("0.0.100"), self.account("0.0.101")
        transfer_nft = unittest.mock.AsyncMock()
        with unittest.mock.patch.multiple(
            self.service,
            get_account_balance=unittest.mock.AsyncMock(
                return_value=AccountBalance("0.0.100", "1 ℏ")
            ),
            associate_token_to_account=unittest.mock.AsyncMock(
                side_effect=RuntimeError("INSUFFICIENT_PAYER_BALANCE")
            ),
            transfer_nft=transfer_nft,
        ):
            with self.assertRaises(RuntimeError):
                await self.service.transfer_nft_with_balance_check(
                    "0.0.900", sender, receiver, 1
                )
        transfer_nft.assert_not_called()

    async def test_complete_collection_without_metadata_skips_mint(self):
        account, token = self.account("0.0.100"), self.token()
        create_nft_token = unittest.mock.AsyncMock(return_value=token)
        mint_nfts = unittest.mock.AsyncMock()
        with unittest.mock.patch.multiple(
            self.service,
            create_account=unittest.mock.AsyncMock(return_value=account),
            create_nft_token=create_nft_token,
            mint_nfts=mint_nfts,
        ):
            result = await self.service.create_complete_nft_collection({"symbol": "X"})

        mint_nfts.assert_not_called()
        create_nft_token.assert_awaited_once_with(account, {"symbol": "X"})
        self.assertIsNone(result.mint_result)
        self.assertEqual(result.summary, CollectionSummary("0.0.100", "0.0.900", 0, []))

    async def test_complete_collection_with_metadata(self):
        account, token = self.account("0.0.100"), self.token()
        minted = MintResult([1, 2, 3], "SUCCESS", "0.0.900", utc_now())
        create_account = unittest.mock.AsyncMock(return_value=account)
        mint_nfts = unittest.mock.AsyncMock(return_value=minted)
        with unittest.mock.patch.multiple(
            self.service,
            create_account=create_account,
            create_nft_token=unittest.mock.AsyncMock(return_value=token),
            mint_nfts=mint_nfts,
        ):
            result = await self.service.create_complete_nft_collection(
                None, ["a", "b", "c"], initial_balance=250
            )

        create_account.assert_awaited_once_with(250)
        mint_nfts.assert_awaited_once_with(token, ["a", "b", "c"])
        self.assertEqual(result.summary.nft_count, 3)
        self.assertEqual(result.summary.serials, ["1", "2", "3"])

    async def test_associate_token_parses_string_id(self):
        receiver = self.account("0.0.101")
        transaction = _builder("set_account_id", "add_token_id")
        transaction.execute.return_value = _receipt()
        self.mocks["TokenAssociateTransaction"].return_value = transaction

        result = await self.service.associate_token_to_account(receiver, "0.0.900")

        transaction.set_account_id.assert_called_once_with("0.0.101")
        transaction.add_token_id.assert_called_once_with(TokenId(0, 0, 900))
        transaction.sign.assert_called_once_with(receiver.private_key)
        self.assertEqual(result.status, "SUCCESS")
        self.assertEqual(result.token_id, TokenId(0, 0, 900))

    async def test_transfer_workflow_with_string_token_id(self):
        sender, receiver = self.account("0.0.100"), self.account("0.0.101")
        associate = _builder("set_account_id", "add_token_id")
        associate.execute.return_value = _receipt()
        self.mocks["TokenAssociateTransaction"].return_value = associate
        transfer = _builder("add_nft_transfer")
        transfer.execute.return_value = _receipt()
        self.mocks["TransferTransaction"].return_value = transfer

        with unittest.mock.patch.object(
            self.service,
            "get_account_balance",
            unittest.mock.AsyncMock(return_value=AccountBalance("0.0.100", "1 ℏ")),
        ):
            result = await self.service.transfer_nft_with_balance_check(
                "0.0.900", sender, receiver, 2
            )

        associate.add_token_id.assert_called_once_with(TokenId(0, 0, 900))
        transfer.add_nft_transfer.assert_called_once_with(
            NftId(TokenId(0, 0, 900), 2), "0.0.100", "0.0.101"
        )
        self.assertEqual(result.summary.token_id, "0.0.900")
        self.assertTrue(result.summary.success)

    async def test_mint_accepts_tuple_of_items(self):
        transaction = _builder("set_token_id", "set_metadata")
        transaction.execute.return_value = _receipt(serial_numbers=[1, 2])
        self.mocks["TokenMintTransaction"].return_value = transaction

        result = await self.service.mint_nfts(self.token(), ("ipfs://a", "ipfs://b"))

        transaction.set_metadata.assert_called_once_with([b"ipfs://a", b"ipfs://b"])
        self.assertEqual(result.count, 2)

    def test_default_service_config(self):
        other = HederaNftService("0.0.3", "302e020100300506032b6570")
        self.assertEqual(self.service.service_config, ServiceConfig())
        self.assertEqual(other.service_config.max_transaction_fee, 50)


if __name__ == "__main__":
    unittest.main()
