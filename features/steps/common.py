import json
import typing

from behave import given, then, use_step_matcher

from hedera_nft.models import AccountBalance

# Use regular expressions
use_step_matcher("re")


@given(r"a token config override (?P<input_value>.+)")
def given_token_config_override(context: typing.Any, input_value: str):
    context.input = json.loads(input_value)


@given(r"no token config override")
def given_no_token_config_override(context: typing.Any):
    context.input = None


@given(r"metadata item (?P<input_value>.+)")
def given_metadata_item(context: typing.Any, input_value: str):
    context.input = json.loads(input_value)


@given(r"mirror metadata ?(?P<input_value>\S*)")
def given_mirror_metadata(context: typing.Any, input_value: str):
    context.input = input_value


@given(r"an account balance holding (?P<input_value>.+)")
def given_account_balance(context: typing.Any, input_value: str):
    context.input = AccountBalance("0.0.100", "10 ℏ", json.loads(input_value))


@then(r"the result should be string (?P<expected_value>.*)")
def then_result_string(context: typing.Any, expected_value: str):
    expected_val = parse_string(expected_value)
    output = context.output
    if isinstance(output, bytes):
        output = output.decode("utf-8")
    assert output == expected_val, (
        "Expected " + str(expected_val) + " but got " + str(output)
    )


@then(r"the result should be int (?P<expected_value>\d+)")
def then_result_int(context: typing.Any, expected_value: str):
    assert context.output == int(expected_value), (
        "Expected " + expected_value + " but got " + str(context.output)
    )


def parse_string(input_value: str):
    return input_value.removeprefix('"').removesuffix('"')
