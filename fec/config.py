"""Simulation configuration."""

from dataclasses import dataclass

import numpy as np

from fec.channel import ChannelConfig
from fec.code_construction import MIN_SIZE_PARAMETER


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one interleaved transmission run.

    The five channel and code parameters have no defaults. ``extended``
    selects the SEC-DED code, ``seed`` makes the run reproducible.
    """

    size_parameter: int
    interleaving_depth: int
    prob_of_error: float
    prob_good_to_bad: float
    prob_bad_to_good: float

    extended: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.size_parameter < MIN_SIZE_PARAMETER:
            msg = f"size_parameter must be at least {MIN_SIZE_PARAMETER}, got {self.size_parameter}"
            raise ValueError(msg)
        if self.interleaving_depth < 1:
            msg = f"interleaving_depth must be at least 1, got {self.interleaving_depth}"
            raise ValueError(msg)
        # ChannelConfig checks the probabilities
        self.channel_config()

    def channel_config(self, seed: int | np.random.SeedSequence | None = None) -> ChannelConfig:
        """Return the channel part of this configuration."""
        return ChannelConfig(
            prob_of_error=self.prob_of_error,
            prob_good_to_bad=self.prob_good_to_bad,
            prob_bad_to_good=self.prob_bad_to_good,
            seed=seed,
        )

    @property
    def total_length(self) -> int:
        """Codeword length implied by the configuration."""
        n = (1 << self.size_parameter) - 1
        return n + 1 if self.extended else n

    @property
    def data_length(self) -> int:
        """Source word length implied by the configuration."""
        return (1 << self.size_parameter) - 1 - self.size_parameter
