# SPDX-License-Identifier: Apache-2.0

import asyncio
import logging

from hfc.fabric import Client
from hfc.fabric.orderer import Orderer
from hfc.fabric.peer import Peer
from hfc.fabric.transaction.tx_context import create_tx_context
from hfc.fabric.transaction.tx_proposal_request import CC_TYPE_GOLANG, \
    create_tx_prop_req
from hfc.util import utils

from foodtrace.ledger.errors import ConfigurationError
from foodtrace.ledger.events import CommitListener
from foodtrace.ledger.identity import create_identity
from foodtrace.util.consts import DEFAULT_COMMIT_TIMEOUT

_logger = logging.getLogger(__name__)

PEER_NAME = 'peer0'
ORDERER_NAME = 'orderer'


def _grpc_opts(server_hostname):
    if not server_hostname:
        return None
    return (('grpc.ssl_target_name_override', server_hostname),)


def _connect(cls, name, endpoint, tls_cacerts, server_hostname):
    try:
        return cls(name=name, endpoint=endpoint, tls_ca_cert_file=tls_cacerts,
                   opts=_grpc_opts(server_hostname))
    except OSError as e:
        raise ConfigurationError(
            'Cannot connect {} at {}: {}'.format(name, endpoint, e))


class LedgerSession(object):
    """The ledger handles of a single gateway call.

    A session owns its identity, client, channel, peer and, for
    transactions, an orderer. Nothing is shared between sessions, so
    concurrent calls never see each other's handles.

    :param config: a GatewayConfig
    :param requestor: the signing user, created from config when None
    """

    def __init__(self, config, requestor=None):
        self._config = config
        self._requestor = requestor
        self._client = None
        self._channel = None
        self._peer = None
        self._orderer = None

    @property
    def requestor(self):
        return self._requestor

    @property
    def channel(self):
        return self._channel

    @property
    def peer(self):
        return self._peer

    @property
    def orderer(self):
        return self._orderer

    def open(self, with_orderer=False):
        """Create the identity and the peer/orderer connections

        :param with_orderer: also connect the orderer, needed to broadcast
        :return: the session itself
        """
        config = self._config
        if self._requestor is None:
            self._requestor = create_identity(config)

        self._client = Client()
        self._channel = self._client.new_channel(config.channel_id)

        # close_grpc_channels only closes what is registered on the client
        self._peer = _connect(Peer, PEER_NAME, config.peer_url,
                              config.peer_tls_cacerts, config.peer_hostname)
        self._channel.add_peer(self._peer)
        self._client._peers[PEER_NAME] = self._peer

        if with_orderer:
            self._orderer = _connect(Orderer, ORDERER_NAME,
                                     config.orderer_url,
                                     config.orderer_tls_cacerts,
                                     config.orderer_hostname)
            self._channel.add_orderer(self._orderer)
            self._client._orderers[ORDERER_NAME] = self._orderer

        _logger.debug('Open session on %s, peer=%s, orderer=%s',
                      config.channel_id, config.peer_url,
                      config.orderer_url if with_orderer else None)
        return self

    async def send_proposal(self, prop_type, cc_name, request):
        """Sign and send a chaincode proposal to the session peer

        :param prop_type: CC_QUERY or CC_INVOKE
        :param cc_name: chaincode name
        :param request: a TransactionRequest
        :return: (tx_id, responses, proposal, header), responses holding
         the exception raised by a peer in its place
        """
        tran_prop_req = create_tx_prop_req(
            prop_type=prop_type,
            cc_name=cc_name,
            cc_type=CC_TYPE_GOLANG,
            fcn=request.fcn,
            args=request.args
        )

        tx_context = create_tx_context(
            self._requestor,
            self._requestor.cryptoSuite,
            tran_prop_req
        )
        _logger.debug('Assigning transaction_id: %s', tx_context.tx_id)

        responses, proposal, header = self._channel.send_tx_proposal(
            tx_context, [self._peer])
        res = await asyncio.gather(*responses, return_exceptions=True)
        return tx_context.tx_id, res, proposal, header

    async def broadcast(self, responses, proposal, header):
        """Send the endorsed transaction to the orderer

        :return: list of the orderer broadcast responses
        """
        tran_req = utils.build_tx_req((responses, proposal, header))
        tx_context = create_tx_context(
            self._requestor,
            self._requestor.cryptoSuite,
            tran_req
        )

        # response is a stream
        stream = utils.send_transaction(self._channel.orderers, tran_req,
                                        tx_context)
        return [v async for v in stream]

    def new_commit_listener(self, tx_id, timeout=DEFAULT_COMMIT_TIMEOUT):
        event_hub = self._channel.newChannelEventHub(self._peer,
                                                     self._requestor)
        return CommitListener(event_hub, tx_id, timeout)

    async def close(self):
        if self._client is not None:
            await self._client.close_grpc_channels()
            self._client = None


async def open_session(config, with_orderer=False):
    """Factory method to construct and open a LedgerSession.

    A session failing to open is closed before the error is raised.
    """
    session = LedgerSession(config)
    try:
        session.open(with_orderer=with_orderer)
    except Exception:
        await session.close()
        raise
    return session
