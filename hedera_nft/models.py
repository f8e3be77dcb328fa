# SPDX-License-Identifier: Apache-2.0

"""
Records returned by :class:`hedera_nft.nft_service.HederaNftService`.

Every record is reshaped from a single SDK receipt or query response and is
never mutated afterwards. Identifiers keep their SDK types where later calls
need them (``AccountId``, ``TokenId``, keys) and are stringified where the
record only exists to be printed (balances, basic token info).

Ledger statuses are stored by name, e.g. ``"SUCCESS"``.
"""

from __future__ import annotations

import unittest
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from hiero_sdk_python import AccountId, PrivateKey, PublicKey, TokenId


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class TokenConfig:
    """Name, symbol and supply cap of an NFT collection."""

    name: str = "diploma"
    symbol: str = "GRAD"
    max_supply: int = 250

    @staticmethod
    def from_overrides(
        overrides: Optional[Union[TokenConfig, Dict[str, Any]]] = None
    ) -> TokenConfig:
        """
        Merge partial overrides over the defaults.

        Keys that are not ``TokenConfig`` fields are ignored, so a wider
        collection description such as ``COLLECTION_INFO`` can be passed
        straight through.

        :param overrides: A ready config, a mapping of overrides, or None
        :return: The merged config
        """
        if isinstance(overrides, TokenConfig):
            return overrides
        known = {f.name for f in fields(TokenConfig)}
        return TokenConfig(
            **{k: v for k, v in (overrides or {}).items() if k in known}
        )


@dataclass(frozen=True)
class Account:
    """A ledger account together with the key pair that controls it."""

    account_id: AccountId
    private_key: PrivateKey = field(repr=False)
    public_key: PublicKey
    status: Optional[str] = None
    balance: Optional[int] = None

    @staticmethod
    def from_strings(account_id: str, private_key: str) -> Account:
        """
        Rebuild an existing account from its id and private key strings.

        :param account_id: Account id in ``shard.realm.num`` form
        :param private_key: Private key as accepted by ``PrivateKey.from_string``
        """
        key = PrivateKey.from_string(private_key)
        return Account(AccountId.from_string(account_id), key, key.public_key())


@dataclass(frozen=True)
class Token:
    """An NFT token as created by the service and read back from the ledger."""

    token_id: TokenId
    status: str
    name: str
    symbol: str
    token_type: Any
    decimals: int
    total_supply: int
    max_supply: int
    supply_type: Any
    treasury_account_id: Optional[AccountId]
    supply_key: Any
    treasury_account: Account = field(repr=False)


@dataclass(frozen=True)
class MintResult:
    serials: List[int]
    status: str
    token_id: TokenId
    minted_at: str

    @property
    def count(self) -> int:
        return len(self.serials or [])


@dataclass(frozen=True)
class TokenBasicInfo:
    """Essential token fields, all as strings."""

    token_id: Optional[str]
    name: str
    symbol: str
    type: Optional[str]
    total_supply: Optional[str]
    max_supply: Optional[str]
    treasury: Optional[str]


@dataclass(frozen=True)
class AssociationResult:
    status: str
    account_id: AccountId
    token_id: TokenId
    associated_at: str


@dataclass(frozen=True)
class AccountBalance:
    """HBAR and token balances of one account.

    ``tokens`` maps token id strings to amount strings and is empty when the
    account holds no tokens. For NFTs the amount is the number of serials held.
    """

    account_id: str
    hbar_balance: str
    tokens: Dict[str, str] = field(default_factory=dict)

    def token_amount(self, token_id: Optional[Union[str, TokenId]] = None) -> int:
        """
        Amount held of ``token_id``, or of the first token listed when no id
        is given. Returns 0 when nothing matches.
        """
        if token_id is None:
            return int(next(iter(self.tokens.values()), 0))
        return int(self.tokens.get(str(token_id), 0))

    def tokens_or_none(self) -> Union[Dict[str, str], str]:
        return self.tokens if self.tokens else "None"


@dataclass(frozen=True)
class TransferResult:
    status: str
    token_id: TokenId
    serial_number: int
    from_account: str
    to_account: str
    transferred_at: str


@dataclass(frozen=True)
class BalancePair:
    sender: AccountBalance
    receiver: AccountBalance


@dataclass(frozen=True)
class BalanceCheck:
    before: BalancePair
    after: BalancePair


@dataclass(frozen=True)
class TransferSummary:
    token_id: str
    serial_number: int
    sender: str
    receiver: str
    success: bool


@dataclass(frozen=True)
class TransferWorkflowResult:
    """Transfer outcome together with balances taken before and after it."""

    transfer_result: TransferResult
    balances: BalanceCheck
    summary: TransferSummary


@dataclass(frozen=True)
class CollectionSummary:
    account_id: str
    token_id: str
    nft_count: int
    serials: List[str]


@dataclass(frozen=True)
class CollectionResult:
    """Treasury account, token and optional mint of a freshly created collection."""

    account: Account
    token: Token
    mint_result: Optional[MintResult]
    summary: CollectionSummary


class Test(unittest.TestCase):
    def test_token_config_defaults(self):
        config = TokenConfig.from_overrides()
        self.assertEqual(config, TokenConfig("diploma", "GRAD", 250))

    def test_token_config_partial_override(self):
        config = TokenConfig.from_overrides({"symbol": "DIP", "total_cids": 5})
        self.assertEqual(config.name, "diploma")
        self.assertEqual(config.symbol, "DIP")
        self.assertEqual(config.max_supply, 250)

    def test_token_config_passthrough(self):
        config = TokenConfig("x", "Y", 3)
        self.assertIs(TokenConfig.from_overrides(config), config)

    def test_token_amount(self):
        balance = AccountBalance("0.0.5", "10 ℏ", {"0.0.9": "4", "0.0.10": "1"})
        self.assertEqual(balance.token_amount(), 4)
        self.assertEqual(balance.token_amount("0.0.10"), 1)
        self.assertEqual(balance.token_amount("0.0.11"), 0)
        self.assertEqual(AccountBalance("0.0.5", "10 ℏ").token_amount(), 0)

    def test_tokens_or_none(self):
        self.assertEqual(AccountBalance("0.0.5", "1 ℏ").tokens_or_none(), "None")
        self.assertEqual(
            AccountBalance("0.0.5", "1 ℏ", {"0.0.9": "2"}).tokens_or_none(),
            {"0.0.9": "2"},
        )

    def test_mint_count(self):
        self.assertEqual(MintResult([1, 2, 3], "SUCCESS", None, utc_now()).count, 3)
        self.assertEqual(MintResult([], "SUCCESS", None, utc_now()).count, 0)
