"""Tests for the local message channel."""

from fscheckout.adapters.channel import LocalMessageChannel


class TestDispatch:
    """Delivery to the registered handler."""

    def test_delivers_payload(self):
        channel = LocalMessageChannel("test")
        received = []
        channel.on_message(received.append)
        channel.send("one")
        assert received == ["one"]

    def test_fifo_order(self):
        channel = LocalMessageChannel("test")
        received = []
        channel.on_message(received.append)
        for payload in ["a", "b", "c"]:
            channel.send(payload)
        assert received == ["a", "b", "c"]

    def test_reentrant_send_is_queued(self):
        channel = LocalMessageChannel("test")
        events = []

        def handler(payload):
            events.append(("begin", payload))
            if payload == "first":
                channel.send("second")
            events.append(("end", payload))

        channel.on_message(handler)
        channel.send("first")
        assert events == [
            ("begin", "first"),
            ("end", "first"),
            ("begin", "second"),
            ("end", "second"),
        ]

    def test_payloads_are_passed_untouched(self):
        channel = LocalMessageChannel("test")
        received = []
        channel.on_message(received.append)
        payload = {"not": "a string"}
        channel.send(payload)
        assert received[0] is payload


class TestRegistration:
    """Handler registration and closing."""

    def test_without_handler_payload_is_dropped(self):
        channel = LocalMessageChannel("test")
        channel.send("lost")
        received = []
        channel.on_message(received.append)
        channel.send("kept")
        assert received == ["kept"]

    def test_new_handler_replaces_old(self):
        channel = LocalMessageChannel("test")
        first, second = [], []
        channel.on_message(first.append)
        channel.on_message(second.append)
        channel.send("x")
        assert first == []
        assert second == ["x"]

    def test_closed_channel_drops_payloads(self):
        channel = LocalMessageChannel("test")
        received = []
        channel.on_message(received.append)
        channel.close()
        channel.send("late")
        assert channel.closed
        assert received == []
