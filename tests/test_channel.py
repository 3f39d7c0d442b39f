"""Tests for message channels."""

import threading

import pytest

from agenda.core.channel import Channel, ChannelClosed


class TestChannel:
    def test_drain_in_arrival_order(self):
        channel = Channel()
        for i in range(5):
            channel.send(i)

        assert list(channel.drain()) == [0, 1, 2, 3, 4]
        assert list(channel.drain()) == []

    def test_drain_does_not_block_when_empty(self):
        assert list(Channel().drain()) == []

    def test_multiple_producers(self):
        channel = Channel()

        def produce(prefix):
            for i in range(100):
                channel.send(f"{prefix}{i}")

        threads = [threading.Thread(target=produce, args=(p,)) for p in "abc"]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        received = list(channel.drain())
        assert len(received) == 300
        # Per-producer order is preserved
        assert [m for m in received if m.startswith("a")] == [f"a{i}" for i in range(100)]

    def test_recv_timeout(self):
        with pytest.raises(TimeoutError):
            Channel("auth").recv(timeout=0.01)

    def test_send_after_close(self):
        channel = Channel("fired")
        channel.send("before")
        channel.close()

        with pytest.raises(ChannelClosed):
            channel.send("after")
        assert channel.closed
        assert list(channel.drain()) == ["before"]
