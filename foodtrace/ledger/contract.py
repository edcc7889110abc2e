# SPDX-License-Identifier: Apache-2.0

import asyncio
import logging

from foodtrace.ledger.errors import BadProposalError, BroadcastError, \
    GatewayError, MalformedResponseError, QueryError
from foodtrace.ledger.results import InvokeResult, QueryResult
from foodtrace.util.consts import BROADCAST_SUCCESS, CC_INVOKE, CC_QUERY, \
    DEFAULT_COMMIT_TIMEOUT, SUCCESS_STATUS

_logger = logging.getLogger(__name__)


def _check_shape(response):
    """Fail loudly on a proposal response without a 'response' field."""
    if not hasattr(response, 'response') \
            or not hasattr(response.response, 'status'):
        raise MalformedResponseError(
            'Unexpected proposal response: {!r}'.format(response))
    return response


def _decode(payload):
    if isinstance(payload, bytes):
        return payload.decode('utf-8', errors='replace')
    return str(payload)


def _discard(task):
    if not task.done():
        task.cancel()
    elif not task.cancelled():
        # mark the exception retrieved, the caller reports its own failure
        task.exception()


class Contract(object):
    """Represents the chaincode instance reached through one session.

    :param session: an opened LedgerSession
    :param cc_name: chaincode name
    :param commit_timeout: seconds to wait for the commit event
    """

    def __init__(self, session, cc_name,
                 commit_timeout=DEFAULT_COMMIT_TIMEOUT):
        self.session = session
        self.cc_name = cc_name
        self.commit_timeout = commit_timeout

    async def evaluate_transaction(self, request):
        """
        Evaluate a transaction function and return its results.
        The proposal is only endorsed by the peer, never ordered, so
        nothing is written to the ledger.

        :param request: a TransactionRequest
        :return: a QueryResult
        :raises QueryError: the peer answered with an error
        """
        _, responses, _, _ = await self.session.send_proposal(
            CC_QUERY, self.cc_name, request)
        _logger.debug('returned from query %s', request.fcn)

        if not responses:
            _logger.warning('No payloads were returned from query %s',
                            request.fcn)
            return QueryResult(request.fcn, [])
        _logger.debug('Query result count = %d', len(responses))

        first = responses[0]
        if isinstance(first, Exception):
            _logger.error('error from query = %s', first)
            raise QueryError(str(first))

        _check_shape(first)
        if first.response.status != SUCCESS_STATUS:
            _logger.error('error from query = %s', first.response.message)
            raise QueryError(first.response.message)

        payloads = [_decode(r.response.payload) for r in responses
                    if not isinstance(r, Exception)
                    and _check_shape(r).response.status == SUCCESS_STATUS]
        _logger.debug('Response is %s', payloads[0])
        return QueryResult(request.fcn, payloads)

    def _check_proposal(self, tx_id, responses):
        """A proposal is good when the first endorsement has status 200."""
        if not responses:
            _logger.error('transaction proposal %s got no response', tx_id)
            raise BadProposalError('No endorsement for {}'.format(tx_id))

        first = responses[0]
        if isinstance(first, Exception):
            _logger.error('transaction proposal %s was bad: %s', tx_id, first)
            raise BadProposalError(str(first))

        _check_shape(first)
        if first.response.status != SUCCESS_STATUS:
            _logger.error('transaction proposal %s was bad: status %s, %s',
                          tx_id, first.response.status,
                          first.response.message)
            raise BadProposalError(first.response.message or
                                   'status {}'.format(first.response.status))

        _logger.debug('Successfully sent Proposal and received '
                      'ProposalResponse: Status - %s, message - "%s", '
                      'metadata - "%s"', first.response.status,
                      first.response.message, first.response.payload)
        return first

    async def _broadcast(self, tx_id, responses, proposal, header):
        try:
            results = await self.session.broadcast(responses, proposal,
                                                   header)
        except GatewayError:
            raise
        except Exception as e:
            _logger.error('Broadcast of %s failed: %r', tx_id, e)
            raise BroadcastError('Cannot send {} to the orderer: {}'.format(
                tx_id, e)) from e
        if not results:
            raise BroadcastError('No response from orderer for {}'.format(
                tx_id))
        for v in results:
            if v.status != SUCCESS_STATUS:
                _logger.error('Broadcast of %s failed: %s %s',
                              tx_id, v.status, v.info)
                raise BroadcastError('Orderer rejected {}: {} {}'.format(
                    tx_id, v.status, v.info))
        _logger.debug('Broadcast of %s acknowledged', tx_id)
        return BROADCAST_SUCCESS

    async def submit_transaction(self, request):
        """
        Submit a transaction to the ledger. The transaction function is
        endorsed by the peer, then sent to the ordering service while the
        commit event of the transaction is awaited on the peer.

        :param request: a TransactionRequest
        :return: an InvokeResult once the transaction is committed VALID
        :raises BadProposalError: the endorsement is missing or not 200,
         nothing was broadcast
        :raises BroadcastError: the orderer did not accept the transaction
        :raises CommitError: the commit event was invalid, missing or lost
        """
        tx_id, responses, proposal, header = await self.session.send_proposal(
            CC_INVOKE, self.cc_name, request)
        endorsement = self._check_proposal(tx_id, responses)

        listener = self.session.new_commit_listener(tx_id,
                                                    self.commit_timeout)
        listener.start()
        wait_task = asyncio.ensure_future(listener.wait())
        try:
            status = await self._broadcast(tx_id, responses, proposal,
                                           header)
            code, block_number = await wait_task
        finally:
            _discard(wait_task)
            listener.close()

        _logger.debug('event promise all complete for %s', tx_id)
        return InvokeResult(tx_id, status, code, block_number,
                            _decode(endorsement.response.payload))
