# SPDX-License-Identifier: Apache-2.0
#
from foodtrace.util.consts import DEFAULT_COMMIT_TIMEOUT, \
    DEFAULT_STATE_STORE_PATH

DEFAULT = {
    'client': {
        'credentialStore': {
            'path': DEFAULT_STATE_STORE_PATH
        }
    },
    'events': {
        'commit_timeout': DEFAULT_COMMIT_TIMEOUT
    },
    'server': {
        'host': '0.0.0.0',
        'port': 8080,
        'static_dir': 'public',
        'strict_status': False
    },
    'logging': {
        'level': 'DEBUG'
    }
}

# entries without a usable default
REQUIRED = (
    ('identity', 'user_id'),
    ('identity', 'msp_id'),
    ('identity', 'keystore'),
    ('identity', 'signcert'),
    ('channel',),
    ('chaincode',),
    ('peer', 'url'),
    ('orderer', 'url'),
)
