# SPDX-License-Identifier: Apache-2.0

import copy
import json
import logging
import os

from foodtrace.config.default import DEFAULT, REQUIRED
from foodtrace.ledger.errors import ConfigurationError
from foodtrace.util.consts import CONFIG_ENV, DEFAULT_CONFIG_PATH, \
    GRPC_SCHEMES

_logger = logging.getLogger(__name__)


def merge_options(current_options, additional_options):
    """Merge additional options into current options, recursing into dicts

    :param current_options: current options, updated in place
    :param additional_options: additional options to be merged
    :return: result
    """
    result = current_options
    for prop in additional_options:
        if prop in result and isinstance(result[prop], dict) \
                and isinstance(additional_options[prop], dict):
            merge_options(result[prop], additional_options[prop])
        else:
            result[prop] = additional_options[prop]
    return result


def strip_scheme(url):
    """'grpc://localhost:7051' -> 'localhost:7051'"""
    for scheme in GRPC_SCHEMES:
        if url.startswith(scheme):
            return url[len(scheme):]
    return url


class GatewayConfig(object):
    """Network endpoint configuration of the gateway.

    Built once at startup from a JSON profile merged over DEFAULT and
    read-only afterwards.
    """

    def __init__(self, profile=None):
        info = merge_options(copy.deepcopy(DEFAULT),
                             copy.deepcopy(profile or {}))
        self._info = info
        self._validate()

    def _validate(self):
        missing = ['.'.join(path) for path in REQUIRED
                   if self.get(*path) in (None, '')]
        if missing:
            raise ConfigurationError(
                'Missing configuration entries: {}'.format(
                    ', '.join(missing)))
        try:
            timeout = float(self.get('events', 'commit_timeout'))
        except (TypeError, ValueError):
            timeout = 0
        if timeout <= 0:
            raise ConfigurationError(
                'events.commit_timeout must be a positive number')
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(
                'Unknown logging.level {}'.format(self.log_level))

    def get(self, *key_path):
        """Get the info value by key path

        :param key_path: path of the key, e.g. ('peer', 'url')
        :return: a copy of the value or None when the path does not exist
        """
        result = self._info
        for k in key_path:
            if not isinstance(result, dict) or k not in result:
                return None
            result = result[k]
        return copy.deepcopy(result)

    @property
    def user_id(self):
        return self.get('identity', 'user_id')

    @property
    def msp_id(self):
        return self.get('identity', 'msp_id')

    @property
    def org(self):
        """Organization name of the identity, defaults to the msp id."""
        return self.get('identity', 'org') or self.msp_id

    @property
    def keystore(self):
        return self.get('identity', 'keystore')

    @property
    def signcert(self):
        return self.get('identity', 'signcert')

    @property
    def channel_id(self):
        return self.get('channel')

    @property
    def chaincode_id(self):
        return self.get('chaincode')

    @property
    def peer_url(self):
        return strip_scheme(self.get('peer', 'url'))

    @property
    def peer_tls_cacerts(self):
        return self.get('peer', 'tls_cacerts')

    @property
    def peer_hostname(self):
        return self.get('peer', 'server_hostname')

    @property
    def orderer_url(self):
        return strip_scheme(self.get('orderer', 'url'))

    @property
    def orderer_tls_cacerts(self):
        return self.get('orderer', 'tls_cacerts')

    @property
    def orderer_hostname(self):
        return self.get('orderer', 'server_hostname')

    @property
    def state_store_path(self):
        return self.get('client', 'credentialStore', 'path')

    @property
    def commit_timeout(self):
        return float(self.get('events', 'commit_timeout'))

    @property
    def host(self):
        return self.get('server', 'host')

    @property
    def port(self):
        return int(self.get('server', 'port'))

    @property
    def static_dir(self):
        return self.get('server', 'static_dir')

    @property
    def strict_status(self):
        return bool(self.get('server', 'strict_status'))

    @property
    def log_level(self):
        return str(self.get('logging', 'level')).upper()

    def __str__(self):
        return '[{}:{}@{}/{}]'.format(self.__class__.__name__,
                                      self.user_id, self.channel_id,
                                      self.chaincode_id)


def load_config(path=None, overrides=None):
    """Load the gateway profile.

    :param path: JSON profile path, defaults to $FOODTRACE_CONFIG then
     config/gateway.json
    :param overrides: dict merged over the profile, e.g. from the command line
    :return: a GatewayConfig
    """
    path = path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH
    _logger.debug('Load gateway profile from %s', path)
    try:
        with open(path, 'r') as profile:
            d = json.load(profile)
    except OSError as e:
        raise ConfigurationError('Cannot read profile {}: {}'.format(path, e))
    except ValueError as e:
        raise ConfigurationError('Invalid JSON in {}: {}'.format(path, e))

    if overrides:
        merge_options(d, overrides)
    return GatewayConfig(d)
