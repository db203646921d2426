# What it does: Simulates the network side of fetch, pull, push and clone: an artificial delay and a single in-flight operation flag observers can watch
# How it does: `transfer()` is a context manager. It sets the flag to 'download' or 'upload', sleeps for the configured latency, lets the caller do its ref updates and clears the flag even when the caller fails
# What data structure it uses: A single state value plus a list of listener callbacks

import os
import time
from contextlib import contextmanager

from .constants import CLONE_LATENCY, NETWORK_LATENCY, NETWORK_LATENCY_ENV_VAR
from .errors import NetworkBusyError
from .logging import get_logger

logger = get_logger(__name__)

DOWNLOAD = 'download'
UPLOAD = 'upload'


def latency_from_env(default=NETWORK_LATENCY):
    value = os.environ.get(NETWORK_LATENCY_ENV_VAR)
    if value is None:
        return default
    return float(value)


class NetworkSimulator:

    def __init__(self, latency=None, clone_latency=None, sleep=time.sleep):
        self.latency = latency_from_env() if latency is None else latency
        if clone_latency is None:
            clone_latency = CLONE_LATENCY if latency is None else latency
        self.clone_latency = clone_latency
        self.operation = None
        self._sleep = sleep
        self._listeners = []

    @property
    def busy(self):
        return self.operation is not None

    def subscribe(self, listener): # listener(operation) is called with the new flag on every change
        self._listeners.append(listener)

    def _set(self, operation):
        self.operation = operation
        for listener in self._listeners:
            listener(operation)

    @contextmanager
    def transfer(self, direction, clone=False):
        if self.busy:
            raise NetworkBusyError(f"a {self.operation} is already in flight")
        delay = self.clone_latency if clone else self.latency
        logger.debug("network_transfer_started", direction=direction, delay=delay)
        self._set(direction)
        try:
            if delay:
                self._sleep(delay)
            yield
        finally:
            self._set(None)
            logger.debug("network_transfer_finished", direction=direction)
