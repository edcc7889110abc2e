# SPDX-License-Identifier: Apache-2.0

import argparse
import logging
import sys

from aiohttp import web

from foodtrace.config import load_config
from foodtrace.ledger.errors import ConfigurationError
from foodtrace.server.app import create_app

_logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description='REST gateway for the food provenance chaincode')
    p.add_argument('--config', default=None,
                   help='JSON profile, defaults to $FOODTRACE_CONFIG '
                        'then config/gateway.json')
    p.add_argument('--host', default=None)
    p.add_argument('--port', type=int, default=None)
    p.add_argument('--log-level', default=None)
    return p.parse_args(argv)


def overrides_from(args):
    server = {}
    if args.host is not None:
        server['host'] = args.host
    if args.port is not None:
        server['port'] = args.port
    overrides = {'server': server} if server else {}
    if args.log_level is not None:
        overrides['logging'] = {'level': args.log_level}
    return overrides


def setup_logging(level):
    consoleHandler = logging.StreamHandler()
    consoleHandler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s: %(message)s'))
    logger = logging.getLogger('foodtrace')
    logger.setLevel(level)
    logger.addHandler(consoleHandler)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = load_config(args.config, overrides_from(args))
    except ConfigurationError as e:
        print('foodtrace-gateway: {}'.format(e), file=sys.stderr)
        return 2

    setup_logging(config.log_level)
    _logger.info('Serving %s on %s:%s', config, config.host, config.port)
    web.run_app(create_app(config), host=config.host, port=config.port,
                print=None)
    return 0
