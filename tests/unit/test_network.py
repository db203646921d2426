# Unit tests for network.py

import pytest

from sandgit.errors import NetworkBusyError
from sandgit.network import DOWNLOAD, UPLOAD, NetworkSimulator


class TestNetworkSimulator:
    # Tests for the simulated transfer flag and delay

    def test_flag_during_transfer(self):
        sleeps = []
        network = NetworkSimulator(latency=1.5, clone_latency=2.0, sleep=sleeps.append)
        seen = []
        network.subscribe(seen.append)

        with network.transfer(DOWNLOAD):
            assert network.operation == DOWNLOAD
            assert network.busy

        assert network.operation is None
        assert seen == [DOWNLOAD, None]
        assert sleeps == [1.5]

    def test_clone_latency(self):
        sleeps = []
        network = NetworkSimulator(latency=1.5, clone_latency=2.0, sleep=sleeps.append)
        with network.transfer(DOWNLOAD, clone=True):
            pass
        assert sleeps == [2.0]

    def test_zero_latency_never_sleeps(self):
        sleeps = []
        network = NetworkSimulator(latency=0, sleep=sleeps.append)
        with network.transfer(UPLOAD, clone=True):
            pass
        assert sleeps == []

    def test_flag_cleared_on_failure(self):
        network = NetworkSimulator(latency=0)
        with pytest.raises(ValueError):
            with network.transfer(UPLOAD):
                raise ValueError('boom')
        assert network.operation is None

    def test_single_operation_in_flight(self):
        network = NetworkSimulator(latency=0)
        with network.transfer(UPLOAD):
            with pytest.raises(NetworkBusyError):
                with network.transfer(DOWNLOAD):
                    pass
            assert network.operation == UPLOAD

    def test_latency_from_environment(self, monkeypatch):
        monkeypatch.setenv('SANDGIT_NETWORK_LATENCY', '0.25')
        assert NetworkSimulator().latency == 0.25
