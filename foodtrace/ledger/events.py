# SPDX-License-Identifier: Apache-2.0

import asyncio
import logging

from foodtrace.ledger.errors import CommitError, CommitInvalidError, \
    CommitTimeoutError
from foodtrace.util.consts import DEFAULT_COMMIT_TIMEOUT, TX_VALID

_logger = logging.getLogger(__name__)


class CommitListener(object):
    """A cancellable handle on the commit event of one transaction.

    The listener registers the transaction id on a channel event hub and
    runs the hub's delivery stream in its own task. ``wait`` resolves with
    the validation code and block number, and always releases the
    registration and the stream, on success, failure, timeout or
    cancellation.

    :param event_hub: a ChannelEventHub bound to the endorsing peer
    :param tx_id: the transaction id to watch
    :param timeout: seconds to wait for the commit event
    """

    def __init__(self, event_hub, tx_id, timeout=DEFAULT_COMMIT_TIMEOUT):
        self._event_hub = event_hub
        self._tx_id = tx_id
        self._timeout = timeout
        self._future = None
        self._stream_task = None
        self._released = False

    @property
    def tx_id(self):
        return self._tx_id

    @property
    def released(self):
        return self._released

    def start(self):
        """Register the transaction event and open the delivery stream."""
        if self._future is not None:
            raise RuntimeError('listener for {} already started'.format(
                self._tx_id))

        self._future = asyncio.get_running_loop().create_future()
        self._event_hub.registerTxEvent(self._tx_id,
                                        unregister=True,
                                        disconnect=True,
                                        onEvent=self._on_event)
        self._stream_task = asyncio.ensure_future(self._event_hub.connect())
        self._stream_task.add_done_callback(self._on_stream_end)
        return self

    def _on_event(self, tx_id, code, block_number):
        # the hub unregisters and disconnects itself right after this call
        self._released = True
        if not self._future.done():
            self._future.set_result((code, block_number))

    def _on_stream_end(self, task):
        if task.cancelled():
            error = None
        else:
            error = task.exception()
        if self._future.done():
            return
        _logger.error('Event stream for %s closed before the commit event: %s',
                      self._tx_id, error)
        self._future.set_exception(CommitError(
            'Event stream closed before the commit event of {}'.format(
                self._tx_id)))

    async def wait(self):
        """Wait for the commit event

        :return: (validation code, block number)
        :raises CommitTimeoutError: no event within the timeout
        :raises CommitInvalidError: the transaction was committed invalid
        """
        if self._future is None:
            self.start()
        try:
            code, block_number = await asyncio.wait_for(self._future,
                                                        self._timeout)
        except asyncio.TimeoutError:
            _logger.error('No commit event for %s within %ss',
                          self._tx_id, self._timeout)
            raise CommitTimeoutError(
                'No commit event for {} within {}s'.format(self._tx_id,
                                                           self._timeout))
        finally:
            self.close()

        if code != TX_VALID:
            _logger.error('The transaction was invalid, code = %s', code)
            raise CommitInvalidError(self._tx_id, code)

        _logger.info('The transaction %s has been committed in block %s',
                     self._tx_id, block_number)
        return code, block_number

    def close(self):
        """Unregister the event and tear the stream down. Idempotent."""
        if not self._released:
            self._released = True
            self._event_hub.unregisterTxEvent(self._tx_id)
            if self._event_hub.stream is not None:
                self._event_hub.disconnect()
        if self._stream_task is not None and not self._stream_task.done():
            self._stream_task.cancel()
