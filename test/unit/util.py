# SPDX-License-Identifier: Apache-2.0
#
import asyncio
import copy

from foodtrace.config import GatewayConfig
from foodtrace.ledger.events import CommitListener

PROFILE = {
    'identity': {
        'user_id': 'Admin@org1.zjucst.com',
        'msp_id': 'Org1MSP',
        'org': 'org1.zjucst.com',
        'keystore': '/tmp/foodtrace-test/keystore',
        'signcert': '/tmp/foodtrace-test/signcerts/Admin@org1-cert.pem'
    },
    'channel': 'assetschannel',
    'chaincode': 'assets',
    'peer': {
        'url': 'grpc://localhost:27051',
        'server_hostname': 'peer0.org1.zjucst.com'
    },
    'orderer': {
        'url': 'grpc://localhost:7050',
        'server_hostname': 'orderer.zjucst.com'
    }
}


def make_profile(**sections):
    profile = copy.deepcopy(PROFILE)
    profile.update(sections)
    return profile


def make_config(**sections):
    return GatewayConfig(make_profile(**sections))


class _Field(object):
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


class ProposalResponse(object):
    """Stands in for a peer ProposalResponse."""

    def __init__(self, status=200, message='', payload=b''):
        self.response = _Field(status=status, message=message,
                               payload=payload)
        self.endorsement = _Field(signature=b'signature')


class BroadcastResponse(object):
    """Stands in for an orderer BroadcastResponse."""

    def __init__(self, status=200, info=''):
        self.status = status
        self.info = info


class FakeStream(object):

    def __init__(self):
        self.closed = asyncio.Event()
        self.cancelled = False

    def cancel(self):
        self.cancelled = True
        self.closed.set()


class FakeEventHub(object):
    """Behaves like ChannelEventHub for transaction registrations."""

    def __init__(self):
        self.stream = None
        self.registrations = {}
        self.unregistered = []
        self.disconnects = 0

    def registerTxEvent(self, tx_id, unregister=None, start=None, stop=None,
                        disconnect=False, onEvent=None):
        self.registrations[tx_id] = (onEvent, unregister, disconnect)
        return tx_id

    def unregisterTxEvent(self, tx_id):
        self.registrations.pop(tx_id, None)
        self.unregistered.append(tx_id)

    def connect(self):
        self.stream = FakeStream()
        return self._handle_stream(self.stream)

    async def _handle_stream(self, stream):
        await stream.closed.wait()

    def fire(self, tx_id, code, block_number):
        onEvent, unregister, disconnect = self.registrations[tx_id]
        onEvent(tx_id, code, block_number)
        if unregister:
            self.unregisterTxEvent(tx_id)
        if disconnect:
            self.disconnect()

    def disconnect(self):
        self.disconnects += 1
        self.stream.cancel()


class FakeSession(object):
    """A LedgerSession answering from canned peer and orderer responses.

    :param proposal_responses: what the peer endorses with
    :param broadcast_responses: what the orderer acknowledges with
    :param commit_code: validation code delivered after the broadcast,
     None to never deliver the commit event
    """

    tx_id = 'c0ffee'

    def __init__(self, proposal_responses=None, broadcast_responses=None,
                 commit_code='VALID', block_number=7):
        if proposal_responses is None:
            proposal_responses = [ProposalResponse(payload=b'ok')]
        if broadcast_responses is None:
            broadcast_responses = [BroadcastResponse()]
        self.proposal_responses = proposal_responses
        self.broadcast_responses = broadcast_responses
        self.commit_code = commit_code
        self.block_number = block_number
        self.event_hub = FakeEventHub()
        self.listener = None
        self.sent = []
        self.broadcasts = 0
        self.closed = False

    async def send_proposal(self, prop_type, cc_name, request):
        self.sent.append((prop_type, cc_name, request))
        return self.tx_id, list(self.proposal_responses), 'proposal', 'header'

    async def broadcast(self, responses, proposal, header):
        self.broadcasts += 1
        if self.commit_code is not None:
            asyncio.get_running_loop().call_soon(
                self.event_hub.fire, self.tx_id, self.commit_code,
                self.block_number)
        return list(self.broadcast_responses)

    def new_commit_listener(self, tx_id, timeout):
        self.listener = CommitListener(self.event_hub, tx_id, timeout)
        return self.listener

    async def close(self):
        self.closed = True


class FakeGateway(object):
    """Records the calls of the HTTP layer and answers with outcome."""

    def __init__(self, outcome=None):
        self.outcome = outcome
        self.calls = []

    async def _answer(self, kind, fcn, args):
        self.calls.append((kind, fcn, args))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    async def query(self, fcn, args):
        return await self._answer('query', fcn, args)

    async def invoke(self, fcn, args):
        return await self._answer('invoke', fcn, args)
