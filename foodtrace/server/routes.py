# SPDX-License-Identifier: Apache-2.0

import json

from foodtrace.ledger.errors import MissingArgumentError
from foodtrace.util import consts

# operation kinds
QUERY = 'query'
INVOKE = 'invoke'

# where the arguments are read from
QUERY_STRING = 'query'
PATH = 'path'
BODY = 'body'

# how a successful outcome is written back
RELAY_PAYLOAD = 'payload'
RELAY_STATUS = 'status'
RELAY_JSON = 'json'


class Field(object):
    """A request parameter mapped to one chaincode argument."""

    def __init__(self, name, required=False):
        self.name = name
        self.required = required

    def __repr__(self):
        return 'Field({!r}, required={})'.format(self.name, self.required)


def to_arg(value):
    """Chaincode arguments are strings, other JSON values are serialized."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def build_args(params, fields):
    """Build the positional chaincode arguments from request parameters.

    Fields are appended in order. An absent optional field is skipped, it
    is never sent as null or empty string, so the position of the later
    arguments depends on which fields were supplied. An absent required
    field fails the request.

    :param params: mapping of the request parameters
    :param fields: ordered list of Field
    :return: list of str
    :raises MissingArgumentError: a required field is absent
    """
    args = []
    for field in fields:
        value = params.get(field.name)
        if field.required and (value is None or value == ''):
            raise MissingArgumentError(field.name)
        if value is not None:
            args.append(to_arg(value))
    return args


class Route(object):
    """Maps an HTTP method and path to a chaincode operation.

    :param method: HTTP method
    :param path: aiohttp path, with {id} for path parameters
    :param fcn: chaincode function name
    :param kind: QUERY or INVOKE
    :param source: QUERY_STRING, PATH or BODY
    :param fields: ordered list of Field
    :param relay: RELAY_PAYLOAD, RELAY_STATUS or RELAY_JSON
    """

    def __init__(self, method, path, fcn, kind, source, fields,
                 relay=None):
        self.method = method
        self.path = path
        self.fcn = fcn
        self.kind = kind
        self.source = source
        self.fields = list(fields)
        if relay is None:
            relay = RELAY_PAYLOAD if kind == QUERY else RELAY_STATUS
        self.relay = relay

    async def read_params(self, request):
        if self.source == PATH:
            return request.match_info
        if self.source == QUERY_STRING:
            return request.query
        return await read_body(request)

    def build_args(self, params):
        return build_args(params, self.fields)

    def __repr__(self):
        return 'Route({} {} -> {})'.format(self.method, self.path, self.fcn)


async def read_body(request):
    """Parse a JSON or form encoded request body into a mapping."""
    if not request.body_exists:
        return {}
    if request.content_type == 'application/json':
        body = await request.json()
        if not isinstance(body, dict):
            raise ValueError('JSON body must be an object')
        return body
    return await request.post()


_id = Field('id', required=True)
_history = [_id, Field('type')]
_exchange = [Field('origin'), Field('id'), Field('current')]

ROUTES = [
    Route('GET', '/users', consts.CC_QUERY_USER, QUERY, QUERY_STRING,
          [_id]),
    Route('GET', '/users/{id}', consts.CC_QUERY_USER, QUERY, PATH, [_id]),
    Route('GET', '/ingredients/get', consts.CC_QUERY_INGREDIENT, QUERY,
          QUERY_STRING, [_id]),
    Route('GET', '/ingredients/get/{id}', consts.CC_QUERY_INGREDIENT, QUERY,
          PATH, [_id]),
    Route('GET', '/ingredients/exchange/history',
          consts.CC_QUERY_INGREDIENT_HISTORY, QUERY, QUERY_STRING, _history),
    Route('POST', '/users', consts.CC_USER_REGISTER, INVOKE, BODY,
          [Field('name'), Field('id')]),
    Route('POST', '/ingredients/enroll', consts.CC_INGREDIENT_ENROLL, INVOKE,
          BODY, [Field('ingredientid'), Field('ingredientname'),
                 Field('metadata'), Field('ownerid')]),
    Route('POST', '/ingredients/exchange', consts.CC_INGREDIENT_EXCHANGE,
          INVOKE, BODY, _exchange),
    Route('GET', '/deleteusers', consts.CC_USER_DESTROY, INVOKE,
          QUERY_STRING, [_id], relay=RELAY_JSON),
    Route('DELETE', '/deleteusers', consts.CC_USER_DESTROY, INVOKE,
          QUERY_STRING, [_id], relay=RELAY_JSON),

    # food operations of the chaincode
    Route('GET', '/foods/get', consts.CC_QUERY_FOOD, QUERY, QUERY_STRING,
          [_id]),
    Route('GET', '/foods/get/{id}', consts.CC_QUERY_FOOD, QUERY, PATH,
          [_id]),
    Route('GET', '/foods/exchange/history', consts.CC_QUERY_FOOD_HISTORY,
          QUERY, QUERY_STRING, _history),
    Route('POST', '/foods/enroll', consts.CC_FOOD_ENROLL, INVOKE, BODY,
          [Field('foodname'), Field('foodid'), Field('metadata'),
           Field('ownerid')]),
    Route('POST', '/foods/exchange', consts.CC_FOOD_EXCHANGE, INVOKE, BODY,
          _exchange),
    Route('POST', '/ingredients/exchange/food',
          consts.CC_INGREDIENT_EXCHANGE_FOOD, INVOKE, BODY, _exchange),
]
