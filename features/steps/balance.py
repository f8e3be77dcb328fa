from behave import *

# Use regular expressions
use_step_matcher("re")


@when(r"I ask for the amount of token (?P<token_id>\S+)")
def when_token_amount(context, token_id):
    context.output = context.input.token_amount(token_id)


@when("I ask for the amount of the first token held")
def when_first_token_amount(context):
    context.output = context.input.token_amount()
