# SPDX-License-Identifier: Apache-2.0

import logging
import os

from aiohttp import web

from foodtrace.ledger.errors import BadProposalError, BroadcastError, \
    CommitError, CommitTimeoutError, ConfigurationError, GatewayError, \
    MalformedResponseError, MissingArgumentError, QueryError
from foodtrace.ledger.gateway import Gateway
from foodtrace.server.routes import INVOKE, RELAY_JSON, RELAY_STATUS, ROUTES
from foodtrace.util.consts import ERROR_HEADER

_logger = logging.getLogger(__name__)

GATEWAY_KEY = web.AppKey('gateway', Gateway)
CONFIG_KEY = web.AppKey('config', object)

# most specific first
STRICT_STATUS = (
    (BadProposalError, 400),
    (CommitTimeoutError, 504),
    (CommitError, 502),
    (BroadcastError, 502),
    (QueryError, 502),
)


def error_status(error, strict=False):
    """HTTP status of a failed request.

    Ledger failures keep the historical 200 unless strict is set; bad
    input and gateway faults are always reported as such.
    """
    if isinstance(error, MissingArgumentError):
        return 400
    if isinstance(error, (ConfigurationError, MalformedResponseError)):
        return 500
    if not strict:
        return 200
    for cls, status in STRICT_STATUS:
        if isinstance(error, cls):
            return status
    return 502


def error_response(error, strict=False):
    return web.Response(text=error.body,
                        status=error_status(error, strict),
                        headers={ERROR_HEADER: error.category})


def relay(route, result):
    """Write a successful outcome back the way each route always has."""
    if route.relay == RELAY_JSON:
        return web.json_response([result.to_dict()])
    if route.relay == RELAY_STATUS:
        return web.Response(text=result.status)
    return web.Response(text=result.payload or '')


def make_handler(route):
    async def handler(request):
        try:
            params = await route.read_params(request)
        except ValueError as e:
            _logger.warning('%s: invalid request body: %s', route, e)
            return web.Response(text='invalid request body', status=400)

        config = request.app[CONFIG_KEY]
        gateway = request.app[GATEWAY_KEY]
        try:
            args = route.build_args(params)
            _logger.debug('%s %s', route.fcn, args)
            if route.kind == INVOKE:
                result = await gateway.invoke(route.fcn, args)
            else:
                result = await gateway.query(route.fcn, args)
        except GatewayError as e:
            _logger.error('%s failed: [%s] %s', route, e.category, e)
            return error_response(e, config.strict_status)
        return relay(route, result)

    handler.__name__ = 'handle_{}'.format(route.fcn)
    return handler


async def handle_health(_request):
    return web.Response(text='ok')


def make_static_handler(static_dir):
    root = os.path.realpath(static_dir)

    async def handle_static(request):
        filename = request.match_info.get('filename') or 'index.html'
        path = os.path.realpath(os.path.join(root, filename))
        if os.path.isdir(path):
            path = os.path.join(path, 'index.html')
        if not path.startswith(root + os.sep) or not os.path.isfile(path):
            raise web.HTTPNotFound()
        return web.FileResponse(path)

    return handle_static


def create_app(config, gateway=None):
    """Build the aiohttp application of the gateway.

    :param config: a GatewayConfig
    :param gateway: the ledger gateway, a Gateway on config by default
    :return: web.Application
    """
    app = web.Application()
    app[CONFIG_KEY] = config
    app[GATEWAY_KEY] = gateway or Gateway(config)

    app.router.add_get('/health', handle_health)
    for route in ROUTES:
        _logger.debug('Add route %s', route)
        app.router.add_route(route.method, route.path, make_handler(route))

    static_dir = config.static_dir
    if static_dir and os.path.isdir(static_dir):
        app.router.add_get('/{filename:.*}', make_static_handler(static_dir))
    else:
        _logger.info('No static directory at %s', static_dir)
    return app
