from behave import *

from hedera_nft.models import TokenConfig

# Use regular expressions
use_step_matcher("re")


@when("I merge the token config")
def when_merge_token_config(context):
    context.output = TokenConfig.from_overrides(context.input)


@then(
    r'the token config should be "(?P<name>[^"]*)" "(?P<symbol>[^"]*)" capped at (?P<max_supply>\d+)'
)
def then_token_config(context, name, symbol, max_supply):
    expected = TokenConfig(name, symbol, int(max_supply))
    assert context.output == expected, (
        "Expected " + str(expected) + " but got " + str(context.output)
    )
