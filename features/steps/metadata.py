from behave import *

from hedera_nft.mirror_client import decode_metadata
from hedera_nft.nft_service import encode_metadata

# Use regular expressions
use_step_matcher("re")


@when("I encode the metadata for minting")
def when_encode_metadata(context):
    context.output = encode_metadata(context.input)


@when("I decode the mirror metadata")
def when_decode_metadata(context):
    context.output = decode_metadata(context.input)


@then("the encoded metadata should fit the ledger limit")
def then_metadata_fits(context):
    assert len(context.output) <= 100, f"{len(context.output)} bytes"
