# SPDX-License-Identifier: Apache-2.0

import logging
import os

from hfc.fabric.user import create_user
from hfc.util.keyvaluestore import file_key_value_store

from foodtrace.ledger.errors import ConfigurationError
from foodtrace.util.keys import find_private_key, get_key_files_in_dir

_logger = logging.getLogger(__name__)


class KeyStoreWallet(object):
    """KeyStoreWallet reads the identity of one user from its msp folders
        ie. the private key in the keystore directory and the signed
        enrollment certificate
    """

    def __init__(self, keystore, signcert, state_store_path):
        self._keystore = keystore
        self._signcert = signcert
        self._state_store_path = state_store_path

    def exists(self):
        """Returns whether a private key and a certificate are available

        :return: True or False
        """
        if not os.path.isfile(self._signcert):
            return False
        try:
            return len(get_key_files_in_dir(self._keystore)) > 0
        except ConfigurationError:
            return False

    def create_user(self, enrollment_id, org, msp_id):
        """Returns a fresh user instance signing with the stored identity

        :param enrollment_id: enrollment id
        :param org: organization
        :param msp_id: MSP id
        :return: a validated user instance
        """
        key_path = find_private_key(self._keystore)
        _logger.debug('Load privateKey %s and signedCert %s for %s',
                      key_path, self._signcert, enrollment_id)
        state_store = file_key_value_store(self._state_store_path)
        try:
            return create_user(enrollment_id, org, state_store, msp_id,
                               key_path, self._signcert)
        except OSError as e:
            raise ConfigurationError(
                'Cannot read identity of {}: {}'.format(enrollment_id, e))
        except ValueError as e:
            raise ConfigurationError(
                'Invalid identity {}: {}'.format(enrollment_id, e))


def create_identity(config):
    """Build the ledger identity described by a GatewayConfig."""
    wallet = KeyStoreWallet(config.keystore, config.signcert,
                            config.state_store_path)
    return wallet.create_user(config.user_id, config.org, config.msp_id)
