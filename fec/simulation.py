"""Wire a codec, channel, transmitter and receiver into one simulation run."""

import logging
from collections import Counter
from dataclasses import dataclass

import numpy as np

from fec.channel import ChannelModel
from fec.channel_coding import DecodeResult, DecodeStatus, build_code
from fec.config import SimulationConfig
from fec.interleaving import Receiver, Transmitter

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Tables and decoder outcomes of one interleaved block."""

    generated: np.ndarray  # depth x k source words
    transmitted: np.ndarray  # depth x n encoded table
    received: np.ndarray  # depth x n table after the channel
    results: list[DecodeResult]

    @property
    def decoded(self) -> np.ndarray:
        """Recovered source words (depth x k)."""
        return np.vstack([r.source for r in self.results])

    @property
    def word_errors(self) -> int:
        """Number of source words that were not recovered exactly."""
        return int(np.sum(np.any(self.decoded != self.generated, axis=1)))

    @property
    def bit_errors(self) -> int:
        """Number of bits the channel flipped."""
        return int(np.sum(self.transmitted != self.received))

    @property
    def status_counts(self) -> dict[DecodeStatus, int]:
        """Number of codewords per decode outcome."""
        counts = Counter(r.status for r in self.results)
        return {status: counts.get(status, 0) for status in DecodeStatus}


def run_simulation(
    config: SimulationConfig,
    seed: int | np.random.SeedSequence | None = None,
) -> SimulationResult:
    """Transmit and decode one block according to the configuration.

    ``seed`` overrides ``config.seed``. Source generation and the channel
    draw from independent child streams of the same seed.
    """
    if seed is None:
        seed = config.seed
    if not isinstance(seed, np.random.SeedSequence):
        seed = np.random.SeedSequence(seed)
    source_seed, channel_seed = seed.spawn(2)

    codec = build_code(config.size_parameter, extended=config.extended)
    receiver = Receiver(config.interleaving_depth, codec.total_length, codec)
    channel = ChannelModel(config.channel_config(seed=channel_seed))
    transmitter = Transmitter(
        config.interleaving_depth,
        codec,
        channel,
        receiver,
        rng=np.random.default_rng(source_seed),
    )

    generated = transmitter.run()
    results = receiver.decode()
    result = SimulationResult(
        generated=generated,
        transmitted=transmitter.table.copy(),
        received=receiver.table.copy(),
        results=results,
    )
    logger.debug(
        "Block done: %d bit errors, %d word errors",
        result.bit_errors,
        result.word_errors,
    )
    return result


def word_error_rate(config: SimulationConfig, blocks: int) -> float:
    """Fraction of source words decoded incorrectly over several blocks."""
    if blocks < 1:
        msg = f"blocks must be at least 1, got {blocks}"
        raise ValueError(msg)

    children = np.random.SeedSequence(config.seed).spawn(blocks)
    errors = sum(run_simulation(config, seed=child).word_errors for child in children)
    return errors / (blocks * config.interleaving_depth)
