"""Tests for the frame streamer and serial transport."""

from unittest.mock import Mock, patch

import pytest
import serial

from growgrid.devices import FrameStreamer, FrameTransport, SerialTransport
from growgrid.exceptions import TransportOpenError
from growgrid.models import Cell, ConnectionStatus, filled_grid
from growgrid.protocols import ClockEvent, TransportEvent, TransportObserver


class FakeTransport:
    """In-memory FrameTransport that records frames."""

    def __init__(self, fail_open=False):
        self.fail_open = fail_open
        self.fail_writes = False
        self.frames: list[bytes] = []
        self.closed = 0
        self._open = False

    @property
    def is_open(self):
        return self._open

    def open(self):
        if self.fail_open:
            raise TransportOpenError("/dev/fake", "busy")
        self._open = True

    def write(self, data):
        if self.fail_writes:
            return False
        self.frames.append(bytes(data))
        return True

    def close(self):
        self._open = False
        self.closed += 1


class FakeTime:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


GRID = filled_grid(2, Cell(r=200, g=100, b=50, active=True))


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def observer():
    return Mock(spec=TransportObserver)


@pytest.fixture
def streamer(transport, fake_time, observer):
    streamer = FrameStreamer(
        transport, master_brightness=50, frame_interval=0.25, time_source=fake_time
    )
    streamer.register_observer(observer)
    return streamer


@pytest.mark.unit
class TestConnection:
    """Link status transitions."""

    def test_fake_satisfies_protocol(self, transport):
        assert isinstance(transport, FrameTransport)

    def test_connect(self, streamer, observer):
        assert streamer.connect()
        assert streamer.status is ConnectionStatus.CONNECTED
        observer.on_transport_event.assert_called_once_with(TransportEvent.CONNECTED, None)

    def test_failed_open_sets_error(self, fake_time, observer):
        streamer = FrameStreamer(FakeTransport(fail_open=True), time_source=fake_time)
        streamer.register_observer(observer)

        assert not streamer.connect()
        assert streamer.status is ConnectionStatus.ERROR
        observer.on_transport_event.assert_called_once_with(
            TransportEvent.ERROR, "Could not connect to /dev/fake."
        )

    def test_connect_without_transport(self):
        with pytest.raises(ValueError):
            FrameStreamer().connect()

    def test_connect_replaces_transport(self, streamer, transport):
        replacement = FakeTransport()
        streamer.connect(replacement)
        assert streamer.transport is replacement
        assert transport.closed == 1

    def test_disconnect(self, streamer, transport, observer):
        streamer.connect()
        streamer.disconnect()

        assert streamer.status is ConnectionStatus.DISCONNECTED
        assert not transport.is_open
        assert observer.on_transport_event.call_args.args[0] is TransportEvent.DISCONNECTED


@pytest.mark.unit
class TestPush:
    """Throttling and write failure handling."""

    def test_not_connected_sends_nothing(self, streamer, transport):
        assert not streamer.push(GRID, 2)
        assert transport.frames == []

    def test_writes_encoded_frame(self, streamer, transport):
        streamer.connect()
        assert streamer.push(GRID, 2)
        assert transport.frames[0] == bytes([0xAB, 2] + [100, 50, 25] * 4 + [0xBA])
        assert streamer.frames_sent == 1

    def test_throttles_within_interval(self, streamer, transport, fake_time):
        streamer.connect()
        assert streamer.push(GRID, 2)

        fake_time.now += 0.125
        assert not streamer.push(GRID, 2)

        fake_time.now += 0.125  # exactly one interval since the last frame
        assert not streamer.push(GRID, 2)

        fake_time.now += 0.0625
        assert streamer.push(GRID, 2)
        assert len(transport.frames) == 2

    def test_master_brightness_applies(self, streamer, transport):
        streamer.master_brightness = 100
        streamer.connect()
        streamer.push(GRID, 2)
        assert list(transport.frames[0][2:5]) == [200, 100, 50]

    def test_write_failure_drops_link(self, streamer, transport, observer, fake_time):
        streamer.connect()
        transport.fail_writes = True

        assert not streamer.push(GRID, 2)

        assert streamer.status is ConnectionStatus.DISCONNECTED
        assert transport.closed == 1
        observer.on_transport_event.assert_called_with(
            TransportEvent.DISCONNECTED, "Lost connection to the LED controller."
        )

        # Stays down until reconnected
        transport.fail_writes = False
        fake_time.now += 1
        assert not streamer.push(GRID, 2)
        assert streamer.connect()
        assert streamer.push(GRID, 2)


@pytest.mark.unit
class TestClockDriven:
    """Pushing from clock events."""

    def test_tick_pulls_from_grid_source(self, streamer, transport):
        source = Mock(return_value=(GRID, 2))
        streamer.grid_source = source
        streamer.connect()

        streamer.on_clock_event(ClockEvent.TICK, 10)

        source.assert_called_once()
        assert len(transport.frames) == 1

    def test_state_change_is_ignored(self, streamer, transport):
        source = Mock(return_value=(GRID, 2))
        streamer.grid_source = source
        streamer.connect()

        streamer.on_clock_event(ClockEvent.STATE_CHANGED, 10)

        source.assert_not_called()
        assert transport.frames == []


@pytest.mark.unit
class TestSerialTransport:
    """pyserial wrapper with the port mocked out."""

    def test_open_write_close(self):
        port = Mock()
        port.is_open = True
        with patch("growgrid.devices.transport.serial.Serial", return_value=port) as ctor:
            transport = SerialTransport("/dev/ttyACM0", 9600)
            transport.open()

            ctor.assert_called_once_with("/dev/ttyACM0", 9600, timeout=1, write_timeout=1.0)
            assert transport.is_open
            assert transport.write(b"\xab\x01\x00\x00\x00\xba")
            port.write.assert_called_once_with(b"\xab\x01\x00\x00\x00\xba")

            transport.close()
            transport.close()
            port.close.assert_called_once()
            assert not transport.is_open

    def test_open_failure(self):
        with patch(
            "growgrid.devices.transport.serial.Serial",
            side_effect=serial.SerialException("no such port"),
        ):
            transport = SerialTransport("COM9")
            with pytest.raises(TransportOpenError) as exc_info:
                transport.open()
        assert exc_info.value.port == "COM9"
        assert not transport.is_open

    def test_write_failure_returns_false(self):
        port = Mock()
        port.is_open = True
        port.write.side_effect = serial.SerialTimeoutException("timeout")
        with patch("growgrid.devices.transport.serial.Serial", return_value=port):
            transport = SerialTransport("/dev/ttyUSB0")
            transport.open()
            assert not transport.write(b"\x00")

    def test_write_when_closed(self):
        assert not SerialTransport("/dev/ttyUSB0").write(b"\x00")
