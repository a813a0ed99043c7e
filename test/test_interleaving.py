"""Tests for the interleaving transmitter and deinterleaving receiver."""

import numpy as np
import pytest

from fec.channel import ChannelConfig, ChannelModel, ChannelState
from fec.channel_coding import DecodeStatus, build_code
from fec.interleaving import Receiver, Transmitter

SEED = 7
DEPTH = 5


class ScriptedChannel(ChannelModel):
    """Channel whose state follows a fixed per-column script."""

    def __init__(self, bad_columns: set[int], prob_of_error: float = 1.0) -> None:
        """Be BAD exactly during the listed transmission columns."""
        super().__init__(ChannelConfig(prob_of_error=prob_of_error, prob_good_to_bad=0.0, prob_bad_to_good=0.0, seed=0))
        self.bad_columns = bad_columns
        self.column = 0
        self.steps = 0
        self.state = ChannelState.BAD if 0 in bad_columns else ChannelState.GOOD

    def step_state(self) -> ChannelState:
        """Move to the scripted state of the next column."""
        self.steps += 1
        self.column += 1
        self.state = ChannelState.BAD if self.column in self.bad_columns else ChannelState.GOOD
        return self.state


def _clean_channel() -> ChannelModel:
    return ChannelModel(ChannelConfig(prob_of_error=1.0, prob_good_to_bad=0.0, prob_bad_to_good=1.0, seed=SEED))


def _pipeline(
    depth: int,
    channel: ChannelModel,
    m: int = 3,
    extended: bool = False,
) -> tuple[Transmitter, Receiver]:
    codec = build_code(m, extended=extended)
    receiver = Receiver(depth, codec.total_length, codec)
    transmitter = Transmitter(depth, codec, channel, receiver, rng=np.random.default_rng(SEED))
    return transmitter, receiver


class TestTransmitter:
    """End-to-end behavior of the interleaved chain."""

    @pytest.mark.parametrize("depth", [1, 3, 8])
    @pytest.mark.parametrize("extended", [False, True])
    def test_clean_channel_recovers_everything(self, depth: int, extended: bool) -> None:
        """With the channel GOOD throughout, every generated word is recovered."""
        transmitter, receiver = _pipeline(depth, _clean_channel(), m=4, extended=extended)
        generated = transmitter.run()
        results = receiver.decode()

        np.testing.assert_equal(generated.shape, (depth, transmitter.codec.data_length))
        np.testing.assert_array_equal(receiver.table, transmitter.table)
        np.testing.assert_array_equal(np.vstack([r.source for r in results]), generated)
        assert all(r.status is DecodeStatus.CLEAN for r in results)

    def test_table_rows_are_codewords(self) -> None:
        """Each row of the transmit table encodes the matching source word."""
        transmitter, _ = _pipeline(DEPTH, _clean_channel())
        generated = transmitter.run()
        for row, source in enumerate(generated):
            np.testing.assert_array_equal(transmitter.table[row], transmitter.codec.encode(source))

    def test_burst_spread_over_codewords(self) -> None:
        """A burst of one bad column flips one bit in every codeword, all corrected."""
        bad_column = 2
        transmitter, receiver = _pipeline(DEPTH, ScriptedChannel({bad_column}))
        generated = transmitter.run()
        results = receiver.decode()

        errors = transmitter.table != receiver.table
        np.testing.assert_array_equal(errors.sum(axis=1), np.ones(DEPTH))
        assert np.all(errors[:, bad_column])
        assert all(r.status is DecodeStatus.CORRECTED and r.position == bad_column for r in results)
        np.testing.assert_array_equal(np.vstack([r.source for r in results]), generated)

    def test_burst_without_interleaving_is_detected(self) -> None:
        """Depth 1 puts a two-column burst into one codeword; SEC-DED flags it."""
        transmitter, receiver = _pipeline(1, ScriptedChannel({3, 4}), extended=True)
        transmitter.run()
        (result,) = receiver.decode()
        assert result.status is DecodeStatus.UNCORRECTABLE

    def test_steps_channel_once_per_column(self) -> None:
        """The channel state advances once per column, not once per bit."""
        channel = ScriptedChannel(set())
        transmitter, _ = _pipeline(DEPTH, channel)
        transmitter.run()
        assert channel.steps == transmitter.codec.total_length

    def test_seeded_runs_are_reproducible(self) -> None:
        """Same generator seeds give the same generated and received tables."""
        tables = []
        for _ in range(2):
            channel = ChannelModel(
                ChannelConfig(prob_of_error=0.5, prob_good_to_bad=0.3, prob_bad_to_good=0.3, seed=SEED),
            )
            transmitter, receiver = _pipeline(DEPTH, channel)
            transmitter.run()
            tables.append((transmitter.table.copy(), receiver.table.copy()))
        np.testing.assert_array_equal(tables[0][0], tables[1][0])
        np.testing.assert_array_equal(tables[0][1], tables[1][1])

    def test_second_run_without_reset_leaves_tables_intact(self) -> None:
        """A run into a filled receiver fails before touching either table."""
        transmitter, receiver = _pipeline(DEPTH, _clean_channel())
        transmitter.run()
        sent = transmitter.table.copy()

        with pytest.raises(ValueError, match="reset"):
            transmitter.run()

        np.testing.assert_array_equal(transmitter.table, sent)
        np.testing.assert_array_equal(transmitter.table, receiver.table)

    def test_second_run_after_reset(self) -> None:
        """Resetting the receiver allows the next block to be sent and decoded."""
        transmitter, receiver = _pipeline(DEPTH, _clean_channel())
        transmitter.run()
        receiver.reset()
        generated = transmitter.run()

        np.testing.assert_array_equal(transmitter.table, receiver.table)
        np.testing.assert_array_equal(np.vstack([r.source for r in receiver.decode()]), generated)

    def test_rejects_invalid_depth(self) -> None:
        """Interleaving depth must be at least 1."""
        codec = build_code(3)
        receiver = Receiver(1, codec.total_length, codec)
        with pytest.raises(ValueError, match="at least 1"):
            Transmitter(0, codec, _clean_channel(), receiver)

    def test_rejects_mismatched_receiver(self) -> None:
        """Transmitter and receiver tables must have the same shape."""
        codec = build_code(3)
        receiver = Receiver(DEPTH + 1, codec.total_length, codec)
        with pytest.raises(ValueError, match="does not match"):
            Transmitter(DEPTH, codec, _clean_channel(), receiver)


class TestReceiver:
    """Buffering rules of the deinterleaver."""

    @pytest.fixture
    def receiver(self) -> Receiver:
        """Create a receiver for the [7,4] code."""
        codec = build_code(3)
        return Receiver(DEPTH, codec.total_length, codec)

    def test_rejects_wrong_column_length(self, receiver: Receiver) -> None:
        """Columns must have exactly depth bits."""
        with pytest.raises(ValueError, match="length 5"):
            receiver.receive(np.zeros(DEPTH + 1, dtype=np.uint8))

    @pytest.mark.parametrize("value", [0.7, 2, -1])
    def test_rejects_non_binary_column(self, receiver: Receiver, value: float) -> None:
        """Values other than 0 and 1 are rejected instead of being cast into the table."""
        column = np.ones(DEPTH)
        column[0] = value
        with pytest.raises(ValueError, match="binary"):
            receiver.receive(column)
        assert receiver.columns_received == 0

    def test_rejects_extra_columns(self, receiver: Receiver) -> None:
        """No more than n columns are accepted."""
        for _ in range(receiver.total_length):
            receiver.receive(np.zeros(DEPTH, dtype=np.uint8))
        with pytest.raises(ValueError, match="already holds"):
            receiver.receive(np.zeros(DEPTH, dtype=np.uint8))

    def test_decode_requires_full_table(self, receiver: Receiver) -> None:
        """Partial tables cannot be decoded."""
        receiver.receive(np.zeros(DEPTH, dtype=np.uint8))
        assert receiver.columns_received == 1
        assert not receiver.complete
        with pytest.raises(RuntimeError, match="1 of 7"):
            receiver.decode()

    def test_columns_fill_in_order(self, receiver: Receiver) -> None:
        """Column c of the table holds the c-th received buffer."""
        columns = np.random.default_rng(SEED).integers(0, 2, size=(receiver.total_length, DEPTH), dtype=np.uint8)
        for column in columns:
            receiver.receive(column)
        np.testing.assert_array_equal(receiver.table, columns.T)

    def test_table_is_read_only(self, receiver: Receiver) -> None:
        """The exposed table cannot be written."""
        with pytest.raises(ValueError, match="read-only"):
            receiver.table[0, 0] = 1

    def test_reset(self, receiver: Receiver) -> None:
        """Reset empties the table for the next block."""
        for _ in range(receiver.total_length):
            receiver.receive(np.ones(DEPTH, dtype=np.uint8))
        assert receiver.complete
        receiver.reset()
        assert receiver.columns_received == 0
        assert not receiver.table.any()

    def test_rejects_length_mismatch_with_codec(self) -> None:
        """Table length must match the codec's codeword length."""
        codec = build_code(3, extended=True)
        with pytest.raises(ValueError, match="does not match"):
            Receiver(DEPTH, 7, codec)
