"""Tests for bus-signal width decoding and drive direction."""

import pytest

from ipweave.errors import SchemaShapeError
from ipweave.model.bus import InterfaceRole
from ipweave.schema.polarity import Direction, Polarity, SignalSpec, effective_direction, resolve


class TestResolve:
    def test_positive_integer(self):
        assert resolve(3) == SignalSpec(polarity=Polarity.TOWARD_PEER, width=3)

    def test_negative_integer(self):
        assert resolve(-2) == SignalSpec(polarity=Polarity.TOWARD_SELF, width=2)

    def test_symbolic(self):
        spec = resolve("-dataWidth")
        assert spec.polarity == Polarity.TOWARD_SELF
        assert spec.symbol == "dataWidth"
        assert spec.is_symbolic
        assert spec.width is None

    def test_numeric_string(self):
        assert resolve(" 8 ") == SignalSpec(polarity=Polarity.TOWARD_PEER, width=8)
        assert resolve("-4").width == 4

    def test_str_round_trips_the_encoding(self):
        assert str(resolve("-dataWidth")) == "-dataWidth"
        assert str(resolve(7)) == "7"

    @pytest.mark.parametrize("encoded", [0, "0", "-0", "", "-", "a-b", 1.5, None, True, [1]])
    def test_invalid_encodings(self, encoded):
        with pytest.raises(SchemaShapeError):
            resolve(encoded)


@pytest.mark.parametrize(
    "polarity, role, expected",
    [
        (Polarity.TOWARD_PEER, InterfaceRole.SOURCE, Direction.DRIVE),
        (Polarity.TOWARD_PEER, InterfaceRole.SINK, Direction.SENSE),
        (Polarity.TOWARD_SELF, InterfaceRole.SOURCE, Direction.SENSE),
        (Polarity.TOWARD_SELF, InterfaceRole.SINK, Direction.DRIVE),
        (Polarity.TOWARD_PEER, InterfaceRole.MONITOR, Direction.SENSE),
        (Polarity.TOWARD_SELF, InterfaceRole.MONITOR, Direction.SENSE),
    ],
)
def test_effective_direction(polarity, role, expected):
    assert effective_direction(polarity, role) == expected


def test_ready_is_driven_by_the_slave():
    ready = resolve(-1)
    assert effective_direction(ready.polarity, InterfaceRole.SINK) == Direction.DRIVE
    assert effective_direction(ready.polarity, InterfaceRole.SOURCE) == Direction.SENSE
