# SPDX-License-Identifier: Apache-2.0

import logging
import os

from foodtrace.ledger.errors import ConfigurationError
from foodtrace.util.consts import PRIVATE_KEY_SUFFIX

_logger = logging.getLogger(__name__)


def get_key_files_in_dir(dir_path):
    """List the private key files of a msp keystore directory.

    :param dir_path: path of the keystore directory
    :return: sorted list of paths ending with '_sk'
    """
    try:
        names = os.listdir(dir_path)
    except OSError as e:
        raise ConfigurationError(
            'Cannot read keystore {}: {}'.format(dir_path, e))

    return [os.path.join(dir_path, name) for name in sorted(names)
            if name.endswith(PRIVATE_KEY_SUFFIX)]


def find_private_key(dir_path):
    """Path of the first private key found in a keystore directory."""
    key_files = get_key_files_in_dir(dir_path)
    if not key_files:
        raise ConfigurationError(
            'No private key (*{}) found in {}'.format(PRIVATE_KEY_SUFFIX,
                                                      dir_path))
    if len(key_files) > 1:
        _logger.warning('Several private keys in %s, using %s',
                        dir_path, key_files[0])
    return key_files[0]
