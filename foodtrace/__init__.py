# SPDX-License-Identifier: Apache-2.0
#

# Set default logging handler to avoid "No handler found" warnings.
import logging

from foodtrace.version import VERSION  # noqa

logging.getLogger(__name__).addHandler(logging.NullHandler())
