# SPDX-License-Identifier: Apache-2.0
#
import copy
import json
import os
import tempfile
import unittest
from unittest import mock

from foodtrace.config import GatewayConfig, load_config, merge_options, \
    strip_scheme
from foodtrace.ledger.errors import ConfigurationError
from test.unit.util import PROFILE, make_profile


class MergeOptionsTest(unittest.TestCase):

    def test_merge_options(self):
        defaultOptions = {
            'top1': {
                'inner11': 10,
                'inner12': 'ten'
            },
            'top2': {
                'inner21': 20,
                'inner22': 'twenty'
            }
        }
        overrideOptions = {
            'top1': {
                'top13': {
                    'inner131': 131
                }
            },
            'top2': 'flat'
        }
        expectedOptions = {
            'top1': {
                'inner11': 10,
                'inner12': 'ten',
                'top13': {
                    'inner131': 131
                }
            },
            'top2': 'flat'
        }

        currentOptions = copy.deepcopy(defaultOptions)
        result = merge_options(currentOptions, overrideOptions)
        self.assertDictEqual(expectedOptions, result)


class GatewayConfigTest(unittest.TestCase):

    def test_defaults(self):
        config = GatewayConfig(PROFILE)
        self.assertEqual(30, config.commit_timeout)
        self.assertEqual(8080, config.port)
        self.assertEqual('public', config.static_dir)
        self.assertFalse(config.strict_status)
        self.assertEqual('/tmp/fabric-client-stateStore/',
                         config.state_store_path)
        self.assertEqual('DEBUG', config.log_level)

    def test_profile_values(self):
        config = GatewayConfig(PROFILE)
        self.assertEqual('Admin@org1.zjucst.com', config.user_id)
        self.assertEqual('Org1MSP', config.msp_id)
        self.assertEqual('org1.zjucst.com', config.org)
        self.assertEqual('assetschannel', config.channel_id)
        self.assertEqual('assets', config.chaincode_id)
        self.assertEqual('localhost:27051', config.peer_url)
        self.assertEqual('localhost:7050', config.orderer_url)
        self.assertEqual('peer0.org1.zjucst.com', config.peer_hostname)
        self.assertIsNone(config.peer_tls_cacerts)

    def test_org_defaults_to_msp_id(self):
        profile = make_profile()
        del profile['identity']['org']
        self.assertEqual('Org1MSP', GatewayConfig(profile).org)

    def test_missing_entries(self):
        profile = make_profile()
        del profile['channel']
        del profile['peer']['url']

        with self.assertRaises(ConfigurationError) as e:
            GatewayConfig(profile)
        self.assertIn('channel', str(e.exception))
        self.assertIn('peer.url', str(e.exception))

    def test_invalid_timeout(self):
        with self.assertRaises(ConfigurationError):
            GatewayConfig(make_profile(events={'commit_timeout': 0}))
        with self.assertRaises(ConfigurationError):
            GatewayConfig(make_profile(events={'commit_timeout': 'soon'}))

    def test_invalid_log_level(self):
        with self.assertRaises(ConfigurationError):
            GatewayConfig(make_profile(logging={'level': 'CHATTY'}))

    def test_get_returns_copies(self):
        config = GatewayConfig(PROFILE)
        config.get('peer')['url'] = 'elsewhere:1'
        self.assertEqual('localhost:27051', config.peer_url)
        self.assertIsNone(config.get('peer', 'nope'))
        self.assertIsNone(config.get('channel', 'nope'))

    def test_profile_is_not_mutated(self):
        profile = make_profile()
        GatewayConfig(profile)
        self.assertNotIn('server', profile)

    def test_strip_scheme(self):
        self.assertEqual('localhost:7051', strip_scheme('grpc://localhost:7051'))
        self.assertEqual('localhost:7051',
                         strip_scheme('grpcs://localhost:7051'))
        self.assertEqual('localhost:7051', strip_scheme('localhost:7051'))


class LoadConfigTest(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'gateway.json')
        with open(self.path, 'w') as f:
            json.dump(PROFILE, f)

    def tearDown(self):
        self.tmp.cleanup()

    def test_load(self):
        config = load_config(self.path)
        self.assertEqual('assets', config.chaincode_id)

    def test_overrides(self):
        config = load_config(self.path, {'server': {'port': 9090}})
        self.assertEqual(9090, config.port)
        self.assertEqual('0.0.0.0', config.host)

    def test_path_from_environment(self):
        with mock.patch.dict(os.environ, {'FOODTRACE_CONFIG': self.path}):
            config = load_config()
        self.assertEqual('assetschannel', config.channel_id)

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_config(os.path.join(self.tmp.name, 'nope.json'))

    def test_invalid_json(self):
        with open(self.path, 'w') as f:
            f.write('{"channel": ')
        with self.assertRaises(ConfigurationError):
            load_config(self.path)


if __name__ == '__main__':
    unittest.main()
