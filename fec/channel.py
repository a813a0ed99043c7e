"""Two-state (Gilbert-Elliott) burst channel model.

The channel is a discrete-time Markov chain with a GOOD state that passes
bits through untouched and a BAD state that flips each bit independently
with probability ``prob_of_error``. The state is advanced once per
transmitted unit (one interleaved column), not once per bit, so a stay in
the BAD state corrupts whole columns.

Source: https://en.wikipedia.org/wiki/Burst_error#Gilbert%E2%80%93Elliott_model
"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

logger = logging.getLogger(__name__)


class ChannelState(Enum):
    """Channel states."""

    GOOD = 0
    BAD = 1


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        msg = f"{name} must be in [0, 1], got {value}"
        raise ValueError(msg)


@dataclass
class ChannelConfig:
    """Configuration for the two-state channel model."""

    prob_of_error: float  # bit flip probability in the BAD state
    prob_good_to_bad: float
    prob_bad_to_good: float

    # Reproducibility
    seed: int | np.random.SeedSequence | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        _check_probability("prob_of_error", self.prob_of_error)
        _check_probability("prob_good_to_bad", self.prob_good_to_bad)
        _check_probability("prob_bad_to_good", self.prob_bad_to_good)


class ChannelModel:
    """Bursty binary channel driven by a two-state Markov chain."""

    def __init__(self, config: ChannelConfig, rng: np.random.Generator | None = None) -> None:
        """Initialize channel model in the GOOD state."""
        self.config = config
        self._injected_rng = rng
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.state = ChannelState.GOOD

    def reset(self) -> None:
        """Return to the GOOD state and restart the random sequence."""
        self.state = ChannelState.GOOD
        if self._injected_rng is None:
            self.rng = np.random.default_rng(self.config.seed)

    def transmit_bit(self, bit: int) -> int:
        """Pass a bit through the channel in its current state."""
        if self.state is ChannelState.BAD and self.rng.random() < self.config.prob_of_error:
            return int(bit) ^ 1
        return int(bit)

    def transmit_column(self, column: np.ndarray) -> np.ndarray:
        """Pass every bit of one transmitted unit through the current state."""
        return np.array([self.transmit_bit(b) for b in column], dtype=np.uint8)

    def step_state(self) -> ChannelState:
        """Advance the Markov chain by one transmitted unit."""
        draw = self.rng.random()
        if self.state is ChannelState.GOOD:
            if draw < self.config.prob_good_to_bad:
                self.state = ChannelState.BAD
                logger.debug("Channel entered BAD state")
        elif draw < self.config.prob_bad_to_good:
            self.state = ChannelState.GOOD
            logger.debug("Channel returned to GOOD state")
        return self.state

    def __repr__(self) -> str:
        """Return string representation."""
        cfg = self.config
        return (
            f"ChannelModel(state={self.state.name}, p_err={cfg.prob_of_error}, "
            f"p_gb={cfg.prob_good_to_bad}, p_bg={cfg.prob_bad_to_good})"
        )
