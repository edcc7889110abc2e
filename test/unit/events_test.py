# SPDX-License-Identifier: Apache-2.0
#
import asyncio
import unittest

from foodtrace.ledger.errors import CommitInvalidError, CommitTimeoutError
from foodtrace.ledger.events import CommitListener
from test.unit.util import FakeEventHub


class CommitListenerTest(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.event_hub = FakeEventHub()
        self.listener = CommitListener(self.event_hub, 'tx1', timeout=1)

    async def test_start_registers_and_connects(self):
        self.listener.start()

        onEvent, unregister, disconnect = self.event_hub.registrations['tx1']
        self.assertIsNotNone(onEvent)
        self.assertTrue(unregister)
        self.assertTrue(disconnect)
        self.assertIsNotNone(self.event_hub.stream)
        self.listener.close()

    async def test_start_twice(self):
        self.listener.start()
        with self.assertRaises(RuntimeError):
            self.listener.start()
        self.listener.close()

    async def test_valid_event(self):
        self.listener.start()
        asyncio.get_running_loop().call_soon(self.event_hub.fire, 'tx1',
                                           'VALID', 3)

        code, block_number = await self.listener.wait()

        self.assertEqual('VALID', code)
        self.assertEqual(3, block_number)
        self.assertTrue(self.listener.released)
        # the hub released itself, the listener must not do it twice
        self.assertEqual(1, self.event_hub.disconnects)

    async def test_invalid_event(self):
        self.listener.start()
        asyncio.get_running_loop().call_soon(self.event_hub.fire, 'tx1',
                                           'ENDORSEMENT_POLICY_FAILURE', 3)

        with self.assertRaises(CommitInvalidError) as e:
            await self.listener.wait()
        self.assertEqual('ENDORSEMENT_POLICY_FAILURE', e.exception.code)
        self.assertEqual('tx1', e.exception.tx_id)

    async def test_timeout(self):
        listener = CommitListener(self.event_hub, 'tx1', timeout=0.01)
        listener.start()

        with self.assertRaises(CommitTimeoutError):
            await listener.wait()

        self.assertTrue(listener.released)
        self.assertEqual(['tx1'], self.event_hub.unregistered)
        self.assertTrue(self.event_hub.stream.cancelled)

    async def test_close_is_idempotent(self):
        self.listener.start()
        self.listener.close()
        self.listener.close()

        self.assertEqual(['tx1'], self.event_hub.unregistered)
        self.assertEqual(1, self.event_hub.disconnects)

    async def test_cancelled_wait_releases(self):
        self.listener.start()
        task = asyncio.ensure_future(self.listener.wait())
        await asyncio.sleep(0)
        task.cancel()

        with self.assertRaises(asyncio.CancelledError):
            await task
        self.assertTrue(self.listener.released)
        self.assertTrue(self.event_hub.stream.cancelled)


if __name__ == '__main__':
    unittest.main()
