"""Tests for the Telemetry bus."""

import pytest

from txguard.telemetry import AlreadyAttachedError


class TestTelemetryAttach:
    """Tests for attaching and detaching handlers."""

    def test_attach_many(self, bus):
        """Test that a handler is registered for every event name."""
        bus.attach_many("h1", [["a", "start"], ("b", "start")], lambda *args: None)

        assert bus.handlers_for(("a", "start")) == ["h1"]
        assert bus.handlers_for(["b", "start"]) == ["h1"]
        assert bus.handlers_for(("c", "start")) == []

    def test_duplicate_id_rejected(self, bus):
        """Test that handler ids are unique."""
        bus.attach_many("h1", [("a",)], lambda *args: None)

        with pytest.raises(AlreadyAttachedError):
            bus.attach_many("h1", [("b",)], lambda *args: None)

    def test_detach(self, bus):
        """Test detaching a handler."""
        bus.attach_many("h1", [("a",)], lambda *args: None)

        assert bus.detach("h1") is True
        assert bus.detach("h1") is False
        assert bus.handlers_for(("a",)) == []


class TestTelemetryExecute:
    """Tests for Telemetry.execute()."""

    def test_handler_receives_event(self, bus):
        """Test handler arguments, including the static config."""
        calls = []

        def handler(name, measurements, metadata, config):
            calls.append((name, measurements, metadata, config))

        bus.attach_many("h1", [["grpc", "client", "rpc", "start"]], handler, config="cfg")
        bus.execute(["grpc", "client", "rpc", "start"], {"t": 1}, {"service": "S"})

        assert calls == [(("grpc", "client", "rpc", "start"), {"t": 1}, {"service": "S"}, "cfg")]

    def test_defaults_to_empty_mappings(self, bus):
        """Test that missing measurements/metadata become empty dicts."""
        calls = []
        bus.attach_many("h1", [("a",)], lambda *args: calls.append(args))

        bus.execute(("a",))

        assert calls == [(("a",), {}, {}, None)]

    def test_only_matching_handlers(self, bus):
        """Test that handlers only receive their own events."""
        a_calls = []
        b_calls = []
        bus.attach_many("ha", [("a",)], lambda *args: a_calls.append(args))
        bus.attach_many("hb", [("b",)], lambda *args: b_calls.append(args))

        bus.execute(("a",))

        assert len(a_calls) == 1
        assert b_calls == []

    def test_handlers_called_in_attach_order(self, bus):
        """Test call order follows attachment order."""
        calls = []
        bus.attach_many("h1", [("a",)], lambda *args: calls.append("h1"))
        bus.attach_many("h2", [("a",)], lambda *args: calls.append("h2"))

        bus.execute(("a",))

        assert calls == ["h1", "h2"]

    def test_error_in_handler(self, bus, caplog):
        """Test that errors in one handler don't affect others."""
        calls = []

        def failing(*args):
            calls.append("failing")
            raise RuntimeError("Test error")

        bus.attach_many("failing", [("a",)], failing)
        bus.attach_many("normal", [("a",)], lambda *args: calls.append("normal"))

        bus.execute(("a",))

        assert calls == ["failing", "normal"]
        assert "Test error" in caplog.text

    def test_dotted_name(self, bus):
        """Test that dotted strings normalize to segment tuples."""
        calls = []
        bus.attach_many("h1", ["grpc.client.rpc.start"], lambda *args: calls.append(args[0]))

        bus.execute(("grpc", "client", "rpc", "start"))

        assert calls == [("grpc", "client", "rpc", "start")]
