# SPDX-License-Identifier: Apache-2.0

"""
Read-only client for the Hedera Mirror Node REST API.

The ledger's balance query reports how many serials of a token an account
holds, not which ones. The mirror node keeps the full ownership history and
is used here to show which NFTs each account owns after a transfer.

Mirror nodes import records from consensus nodes with a delay of a few
seconds, so a freshly transferred NFT may still show its previous owner.
:meth:`MirrorNodeClient.wait_for_nft_owner` polls until the new owner shows
up.

Examples:
    List the serials an account owns::

        from hedera_nft.mirror_client import MirrorNodeClient

        mirror = MirrorNodeClient("https://testnet.mirrornode.hedera.com/api/v1")
        for nft in await mirror.account_nfts("0.0.1234", token_id="0.0.5678"):
            print(nft.serial_number, nft.metadata)
        await mirror.close()
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import time
import unittest
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .metadata import Metadata


@dataclass(frozen=True)
class NftRecord:
    """One NFT as reported by the mirror node."""

    token_id: str
    serial_number: int
    account_id: Optional[str]
    metadata: str

    @staticmethod
    def from_json(data: Dict[str, Any]) -> NftRecord:
        return NftRecord(
            token_id=data["token_id"],
            serial_number=int(data["serial_number"]),
            account_id=data.get("account_id"),
            metadata=decode_metadata(data.get("metadata")),
        )


def decode_metadata(value: Optional[str]) -> str:
    """Decode the base64 metadata field; undecodable values are returned as-is."""
    if not value:
        return ""
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return value


class MirrorNodeClient:
    """Async wrapper over the mirror node's NFT endpoints."""

    base_url: str
    client: httpx.AsyncClient

    def __init__(
        self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        # Default limits
        limits = httpx.Limits()
        timeout = httpx.Timeout(60.0, pool=None)
        headers = {Metadata.CLIENT_HEADER: Metadata.get_client_header_val()}
        self.client = httpx.AsyncClient(
            limits=limits,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def close(self):
        await self.client.aclose()

    async def account_nfts(
        self, account_id: str, token_id: Optional[str] = None
    ) -> List[NftRecord]:
        """
        All NFTs currently owned by an account, following pagination.

        :param account_id: Owner account id string
        :param token_id: Only return NFTs of this token
        :return: Records in the order the mirror node lists them
        """
        records: List[NftRecord] = []
        url = f"{self.base_url}/accounts/{account_id}/nfts"
        params: Optional[Dict[str, Any]] = {"token.id": token_id}
        while url:
            response = await self._get(url, params)
            if response.status_code >= 400:
                raise ApiError(f"{response.text} - {account_id}", response.status_code)
            data = response.json()
            records.extend(NftRecord.from_json(nft) for nft in data.get("nfts", []))
            url = self._next_url(data)
            # The next link already carries the query string.
            params = None
        return records

    async def nft(self, token_id: str, serial_number: int) -> NftRecord:
        """
        Fetch a single NFT.

        :raises NftNotFound: If the mirror node has no record of the serial
        """
        response = await self._get(
            f"{self.base_url}/tokens/{token_id}/nfts/{serial_number}"
        )
        if response.status_code == 404:
            raise NftNotFound(f"{token_id} #{serial_number}", token_id, serial_number)
        if response.status_code >= 400:
            raise ApiError(f"{response.text} - {token_id}", response.status_code)
        return NftRecord.from_json(response.json())

    async def wait_for_nft_owner(
        self,
        token_id: str,
        serial_number: int,
        account_id: str,
        timeout: float = 20,
        poll_interval: float = 1,
    ) -> NftRecord:
        """
        Poll until the mirror node reports ``account_id`` as the owner.

        A serial the mirror node has not imported yet counts as not owned.

        :raises MirrorTimeoutError: If ``timeout`` seconds pass first
        """
        deadline = time.monotonic() + timeout
        while True:
            try:
                record = await self.nft(token_id, serial_number)
                if record.account_id == account_id:
                    return record
            except NftNotFound:
                pass
            if time.monotonic() >= deadline:
                raise MirrorTimeoutError(
                    f"{token_id} #{serial_number} not owned by {account_id} "
                    f"after {timeout}s",
                    timeout,
                )
            await asyncio.sleep(poll_interval)

    def _next_url(self, data: Dict[str, Any]) -> Optional[str]:
        next_link = (data.get("links") or {}).get("next")
        if not next_link:
            return None
        return str(httpx.URL(self.base_url).join(next_link))

    async def _get(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        # format params:
        params = {} if params is None else params
        params = {key: val for key, val in params.items() if val is not None}
        # An explicit empty params would drop the query string of a next link.
        return await self.client.get(url=url, params=params or None)


class ApiError(Exception):
    """The mirror node returned a non-success status code, e.g., >= 400"""

    status_code: int

    def __init__(self, message: str, status_code: int):
        # Call the base class constructor with the parameters it needs
        super().__init__(message)
        self.status_code = status_code


class NftNotFound(Exception):
    """The mirror node has no record of the NFT"""

    token_id: str
    serial_number: int

    def __init__(self, message: str, token_id: str, serial_number: int):
        # Call the base class constructor with the parameters it needs
        super().__init__(message)
        self.token_id = token_id
        self.serial_number = serial_number


class MirrorTimeoutError(Exception):
    """The mirror node did not reach the expected state in time"""

    timeout: float

    def __init__(self, message: str, timeout: float):
        super().__init__(message)
        self.timeout = timeout


BASE_URL = "https://testnet.mirrornode.hedera.com/api/v1"


def _nft_json(serial: int, owner: str, metadata: bytes = b"ipfs://cid") -> Dict[str, Any]:
    return {
        "account_id": owner,
        "token_id": "0.0.900",
        "serial_number": serial,
        "metadata": base64.b64encode(metadata).decode(),
    }


class Test(unittest.IsolatedAsyncioTestCase):
    def mirror(self, handler) -> MirrorNodeClient:
        return MirrorNodeClient(BASE_URL, transport=httpx.MockTransport(handler))

    async def test_account_nfts_follows_pagination(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            self.assertLessEqual(len(seen), 2, "page 1 fetched again")
            if "limit" not in request.url.params:
                return httpx.Response(
                    200,
                    json={
                        "nfts": [_nft_json(1, "0.0.100"), _nft_json(2, "0.0.100")],
                        "links": {
                            "next": "/api/v1/accounts/0.0.100/nfts?token.id=0.0.900&limit=2&serialnumber=lt:2"
                        },
                    },
                )
            return httpx.Response(
                200, json={"nfts": [_nft_json(3, "0.0.100")], "links": {"next": None}}
            )

        mirror = self.mirror(handler)
        records = await mirror.account_nfts("0.0.100", token_id="0.0.900")
        await mirror.close()

        self.assertEqual([r.serial_number for r in records], [1, 2, 3])
        self.assertEqual(records[0].metadata, "ipfs://cid")
        self.assertEqual(len(seen), 2)
        self.assertEqual(seen[0].url.params["token.id"], "0.0.900")
        self.assertEqual(
            seen[1].url.path, "/api/v1/accounts/0.0.100/nfts"
        )
        self.assertEqual(seen[1].url.host, "testnet.mirrornode.hedera.com")
        self.assertEqual(seen[1].url.params["serialnumber"], "lt:2")
        self.assertEqual(seen[1].url.params["limit"], "2")
        self.assertTrue(
            seen[0].headers[Metadata.CLIENT_HEADER].startswith("hedera-nft-demo/")
        )

    async def test_account_nfts_without_token_filter(self):
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertNotIn("token.id", request.url.params)
            return httpx.Response(200, json={"nfts": [], "links": {}})

        mirror = self.mirror(handler)
        self.assertEqual(await mirror.account_nfts("0.0.100"), [])
        await mirror.close()

    async def test_api_error(self):
        mirror = self.mirror(lambda request: httpx.Response(400, text="bad id"))
        with self.assertRaises(ApiError) as ctx:
            await mirror.account_nfts("nope")
        self.assertEqual(ctx.exception.status_code, 400)
        await mirror.close()

    async def test_nft_not_found(self):
        mirror = self.mirror(lambda request: httpx.Response(404, json={}))
        with self.assertRaises(NftNotFound) as ctx:
            await mirror.nft("0.0.900", 7)
        self.assertEqual(ctx.exception.serial_number, 7)
        await mirror.close()

    async def test_wait_for_nft_owner(self):
        owners = iter(["0.0.100", "0.0.100", "0.0.101"])

        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/api/v1/tokens/0.0.900/nfts/1")
            return httpx.Response(200, json=_nft_json(1, next(owners)))

        mirror = self.mirror(handler)
        record = await mirror.wait_for_nft_owner(
            "0.0.900", 1, "0.0.101", timeout=5, poll_interval=0
        )
        self.assertEqual(record.account_id, "0.0.101")
        await mirror.close()

    async def test_wait_for_nft_owner_times_out(self):
        mirror = self.mirror(lambda request: httpx.Response(404, json={}))
        with self.assertRaises(MirrorTimeoutError):
            await mirror.wait_for_nft_owner(
                "0.0.900", 1, "0.0.101", timeout=0, poll_interval=0
            )
        await mirror.close()

    def test_decode_metadata(self):
        encoded = base64.b64encode(json.dumps({"n": 1}).encode()).decode()
        self.assertEqual(decode_metadata(encoded), '{"n": 1}')
        self.assertEqual(decode_metadata(None), "")
        self.assertEqual(decode_metadata("not base64!"), "not base64!")


if __name__ == "__main__":
    unittest.main()
