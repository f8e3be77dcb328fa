# SPDX-License-Identifier: Apache-2.0

"""
IPFS content identifiers minted by the demo.

Each entry becomes the on-ledger metadata of one NFT. Hedera caps NFT
metadata at 100 bytes, so only the ``ipfs://`` URI of the JSON document is
stored on the ledger; the document itself lives off-chain.
"""

from typing import Any, Dict, List

IPFS_CID_COLLECTION: List[str] = [
    "ipfs://bafkreiy3jmjj5n6ejftn5ozgdffbauvsimnnaxadj56jkhc6xt7km3xruy",
    "ipfs://bafkreiojsujupk2efkftmzr77nrwyfcybphd2xkxwp23jgopbppba2kb7a",
    "ipfs://bafkreitzty4bia5lhsr5kah44lxwxlgxaukh4pnv7s4bfo3ktcodw5a4u3",
    "ipfs://bafkreizsjwuvnydhbzwmuuj5olixldbuuz2d2ynggf2r6sh5o7z2takgp5",
    "ipfs://bafkreix6xvk6bfypxnxwj24t3guvnugbaubspcx67lyeps5ltk2aeclhet",
]

COLLECTION_INFO: Dict[str, Any] = {
    "name": "University Diplomas",
    "symbol": "GRAD",
    "description": "Graduation diplomas issued by the university treasury",
    "max_supply": 250,
    "total_cids": len(IPFS_CID_COLLECTION),
}
