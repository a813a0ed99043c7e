"""Column-interleaved transmission of Hamming codewords.

The transmitter encodes ``depth`` source words into a depth x n table and
sends it one column at a time, so a channel burst that spans up to
``depth`` consecutive bits hits each codeword at most once. The receiver
rebuilds the table column by column and decodes each row once all n
columns have arrived.

Columns are assumed to arrive exactly once and in order. Anything that
replaces the direct call between transmitter and receiver must keep that
guarantee.
"""

import logging

import numpy as np

from fec.channel import ChannelModel
from fec.channel_coding import Codec, DecodeResult, DecodeStatus

logger = logging.getLogger(__name__)


def _check_depth(depth: int) -> None:
    if depth < 1:
        msg = f"Interleaving depth must be at least 1, got {depth}"
        raise ValueError(msg)


class Receiver:
    """Deinterleaver that buffers columns and decodes complete tables."""

    def __init__(self, depth: int, total_length: int, codec: Codec) -> None:
        """Allocate the depth x total_length accumulation table."""
        _check_depth(depth)
        if total_length != codec.total_length:
            msg = f"Table length {total_length} does not match codeword length {codec.total_length}"
            raise ValueError(msg)
        self.depth = depth
        self.total_length = total_length
        self.codec = codec
        self._table = np.zeros((depth, total_length), dtype=np.uint8)
        self._columns_received = 0

    @property
    def columns_received(self) -> int:
        """Number of columns buffered so far."""
        return self._columns_received

    @property
    def complete(self) -> bool:
        """Return True once every column of the table has arrived."""
        return self._columns_received == self.total_length

    @property
    def table(self) -> np.ndarray:
        """Read-only view of the received table."""
        view = self._table.view()
        view.flags.writeable = False
        return view

    def receive(self, column: np.ndarray) -> None:
        """Store the next column of the interleaving table."""
        bits = np.asarray(column)
        if bits.shape != (self.depth,):
            msg = f"Column must have length {self.depth}, got shape {bits.shape}"
            raise ValueError(msg)
        if not np.all((bits == 0) | (bits == 1)):
            msg = "Column must be binary"
            raise ValueError(msg)
        if self.complete:
            msg = f"Table already holds all {self.total_length} columns"
            raise ValueError(msg)
        self._table[:, self._columns_received] = bits
        self._columns_received += 1

    def decode(self) -> list[DecodeResult]:
        """Decode every buffered codeword independently."""
        if not self.complete:
            msg = f"Cannot decode after {self._columns_received} of {self.total_length} columns"
            raise RuntimeError(msg)

        results = [self.codec.decode(row) for row in self._table]
        uncorrectable = sum(r.status is DecodeStatus.UNCORRECTABLE for r in results)
        if uncorrectable:
            logger.warning("%d of %d codewords were uncorrectable", uncorrectable, self.depth)
        return results

    def reset(self) -> None:
        """Clear the table for the next block."""
        self._table[:] = 0
        self._columns_received = 0


class Transmitter:
    """Interleaver that encodes random source words and sends them column-wise."""

    def __init__(
        self,
        depth: int,
        codec: Codec,
        channel: ChannelModel,
        receiver: Receiver,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize transmitter."""
        _check_depth(depth)
        if receiver.depth != depth or receiver.total_length != codec.total_length:
            msg = (
                f"Receiver table {receiver.depth}x{receiver.total_length} does not match "
                f"transmitter table {depth}x{codec.total_length}"
            )
            raise ValueError(msg)
        self.depth = depth
        self.codec = codec
        self.channel = channel
        self.receiver = receiver
        self.rng = rng if rng is not None else np.random.default_rng()
        self.table = np.zeros((depth, codec.total_length), dtype=np.uint8)

    def generate_sources(self) -> np.ndarray:
        """Draw ``depth`` uniformly random source words."""
        return self.rng.integers(0, 2, size=(self.depth, self.codec.data_length), dtype=np.uint8)

    def run(self) -> np.ndarray:
        """Encode a block of random source words and transmit it interleaved.

        Returns the generated source words (depth x k). The encoded table is
        kept on ``self.table``.
        Raises ``ValueError`` if the receiver still holds columns of an
        earlier block; reset it first.
        """
        if self.receiver.columns_received != 0:
            msg = (
                f"Receiver already holds {self.receiver.columns_received} columns of a previous block; "
                "reset it before the next run"
            )
            raise ValueError(msg)

        sources = self.generate_sources()
        for row, source in enumerate(sources):
            self.table[row] = self.codec.encode(source)

        for column in self.table.T:
            self.receiver.receive(self.channel.transmit_column(column))
            self.channel.step_state()

        logger.debug("Transmitted %d columns of depth %d", self.codec.total_length, self.depth)
        return sources
