# SPDX-License-Identifier: Apache-2.0

from foodtrace.util.consts import COMMIT_FAILED_MESSAGE, \
    PROPOSAL_FAILED_MESSAGE


class GatewayError(Exception):
    """Base class of every failure the gateway reports to its callers.

    ``category`` is the name sent back in the error header and
    ``legacy_message`` the plain text body older clients expect.
    """
    category = 'Gateway'
    legacy_message = None

    @property
    def body(self):
        if self.legacy_message is not None:
            return self.legacy_message
        return str(self)


class ConfigurationError(GatewayError):
    category = 'Configuration'


class MissingArgumentError(GatewayError):
    category = 'MissingArgument'

    def __init__(self, name):
        super(MissingArgumentError, self).__init__(
            'missing parameter: {}'.format(name))
        self.name = name


class BadProposalError(GatewayError):
    category = 'BadProposal'
    legacy_message = PROPOSAL_FAILED_MESSAGE


class BroadcastError(GatewayError):
    category = 'Broadcast'
    legacy_message = COMMIT_FAILED_MESSAGE


class CommitError(GatewayError):
    category = 'CommitFailed'
    legacy_message = COMMIT_FAILED_MESSAGE


class CommitTimeoutError(CommitError):
    category = 'CommitTimeout'


class CommitInvalidError(CommitError):
    category = 'CommitInvalid'

    def __init__(self, tx_id, code):
        super(CommitInvalidError, self).__init__(
            'The transaction {} was invalid, code = {}'.format(tx_id, code))
        self.tx_id = tx_id
        self.code = code


class QueryError(GatewayError):
    category = 'QueryFailed'


class MalformedResponseError(GatewayError):
    category = 'MalformedResponse'
