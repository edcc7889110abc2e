# SPDX-License-Identifier: Apache-2.0

import logging

from foodtrace.ledger.contract import Contract
from foodtrace.ledger.results import TransactionRequest
from foodtrace.ledger.session import open_session

_logger = logging.getLogger(__name__)


class Gateway(object):
    """The gateway is the connection point of the REST service to the
    Fabric network.

    Every call builds its own identity and session from the configuration
    and closes it before returning; the gateway itself holds no ledger
    state between calls.

    :param config: a GatewayConfig
    :param session_factory: coroutine function (config, with_orderer)
     returning an opened session, defaults to open_session
    """

    def __init__(self, config, session_factory=open_session):
        self._config = config
        self._session_factory = session_factory

    @property
    def config(self):
        return self._config

    def _contract(self, session):
        return Contract(session, self._config.chaincode_id,
                        commit_timeout=self._config.commit_timeout)

    async def query(self, fcn, args):
        """Evaluate a read-only chaincode function

        :param fcn: chaincode function name
        :param args: positional arguments
        :return: a QueryResult
        """
        request = TransactionRequest(fcn, args)
        _logger.info('Start query %s %s', fcn, request.args)
        session = await self._session_factory(self._config,
                                              with_orderer=False)
        try:
            return await self._contract(session).evaluate_transaction(request)
        finally:
            await session.close()

    async def invoke(self, fcn, args):
        """Submit a chaincode transaction and wait for its commit

        :param fcn: chaincode function name
        :param args: positional arguments
        :return: an InvokeResult
        """
        request = TransactionRequest(fcn, args)
        _logger.info('Start invoke %s %s', fcn, request.args)
        session = await self._session_factory(self._config,
                                              with_orderer=True)
        try:
            return await self._contract(session).submit_transaction(request)
        finally:
            await session.close()
