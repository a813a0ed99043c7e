"""Plotting utilities for interleaving tables and error rates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

    from matplotlib.axes import Axes
    from matplotlib.figure import Figure


def plot_bit_tables(
    transmitted: np.ndarray,
    received: np.ndarray,
    title: str | None = None,
) -> tuple[Figure, tuple[Axes, Axes]]:
    """Show the transmitted table next to the bits the channel flipped."""
    fig, (ax_tx, ax_err) = plt.subplots(1, 2, figsize=(10, 4), sharey=True)

    ax_tx.imshow(transmitted, cmap="Greys", vmin=0, vmax=1, aspect="auto", interpolation="nearest")
    ax_tx.set_title("Transmitted codewords")
    ax_tx.set_xlabel("Bit position (transmission column)")
    ax_tx.set_ylabel("Codeword")

    errors = (np.asarray(transmitted) != np.asarray(received)).astype(int)
    ax_err.imshow(errors, cmap="Reds", vmin=0, vmax=1, aspect="auto", interpolation="nearest")
    ax_err.set_title(f"Channel errors ({int(errors.sum())} bits)")
    ax_err.set_xlabel("Bit position (transmission column)")

    if title:
        fig.suptitle(title)

    plt.tight_layout()
    return fig, (ax_tx, ax_err)


def plot_word_error_rate(
    prob_good_to_bad: np.ndarray,
    wer_by_depth: dict[int, Sequence[float]],
    title: str | None = None,
) -> tuple[Figure, Axes]:
    """Plot word error rate against the probability of entering the BAD state."""
    fig, ax = plt.subplots(figsize=(8, 5))

    for depth, wer in sorted(wer_by_depth.items()):
        ax.semilogy(prob_good_to_bad, np.maximum(wer, 1e-6), "o-", label=f"Depth {depth}")

    ax.set_xlabel("P(GOOD -> BAD)")
    ax.set_ylabel("Word error rate")
    ax.legend()
    ax.grid(visible=True, which="both", alpha=0.3)

    if title:
        ax.set_title(title)

    plt.tight_layout()
    return fig, ax
