# SPDX-License-Identifier: Apache-2.0


class TransactionRequest(object):
    """A chaincode function name and its positional arguments."""

    def __init__(self, fcn, args=None):
        self._fcn = fcn
        self._args = list(args or [])

    @property
    def fcn(self):
        return self._fcn

    @property
    def args(self):
        return list(self._args)

    def __eq__(self, other):
        return isinstance(other, TransactionRequest) \
            and self._fcn == other._fcn and self._args == other._args

    def __repr__(self):
        return 'TransactionRequest({!r}, {!r})'.format(self._fcn, self._args)


class QueryResult(object):
    """Outcome of a read-only chaincode evaluation.

    :param fcn: the chaincode function evaluated
    :param payloads: decoded payload of every peer response, in order
    """

    def __init__(self, fcn, payloads):
        self.fcn = fcn
        self.payloads = list(payloads)

    @property
    def payload(self):
        """First payload, or None when the peers returned nothing."""
        if not self.payloads:
            return None
        return self.payloads[0]

    @property
    def is_empty(self):
        return not self.payloads

    def __repr__(self):
        return 'QueryResult(fcn={!r}, payloads={!r})'.format(self.fcn,
                                                             self.payloads)


class InvokeResult(object):
    """Outcome of a committed transaction.

    :param tx_id: the transaction id
    :param broadcast_status: the orderer status name, 'SUCCESS'
    :param validation_code: the commit validation code, 'VALID'
    :param block_number: block in which the transaction was committed
    :param payload: chaincode response payload from the endorsement
    """

    def __init__(self, tx_id, broadcast_status, validation_code,
                 block_number=None, payload=None):
        self.tx_id = tx_id
        self.broadcast_status = broadcast_status
        self.validation_code = validation_code
        self.block_number = block_number
        self.payload = payload

    @property
    def status(self):
        return self.broadcast_status

    def to_dict(self):
        return {
            'status': self.broadcast_status,
            'tx_id': self.tx_id,
            'validation_code': self.validation_code,
            'block_number': self.block_number,
        }

    def __repr__(self):
        return 'InvokeResult({})'.format(
            ', '.join('{}={!r}'.format(k, v)
                      for k, v in self.to_dict().items()))
