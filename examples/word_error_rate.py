#!/usr/bin/env python3
"""Word error rate vs. burst frequency for several interleaving depths.

Shows how spreading each codeword over ``depth`` transmission columns turns
a burst of bad-channel columns into isolated single-bit errors that the
Hamming code can correct. With depth 1 every bad column hits the same
codeword; with larger depths a burst hits each codeword once.

Usage:
    uv run python examples/word_error_rate.py
"""

import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

from fec.config import SimulationConfig
from fec.plotting import plot_word_error_rate
from fec.simulation import word_error_rate

SIZE_PARAMETER = 3
DEPTHS = (1, 4, 8, 16)
PROB_OF_ERROR = 0.5
PROB_BAD_TO_GOOD = 0.5
N_BLOCKS = 200
SEED = 2024


def sweep(prob_good_to_bad: np.ndarray, depth: int, extended: bool = False) -> np.ndarray:
    """Word error rate for each bad-state entry probability at one depth."""
    wer = np.zeros(len(prob_good_to_bad))
    for i, p_gb in enumerate(tqdm(prob_good_to_bad, desc=f"Depth {depth:<3}")):
        config = SimulationConfig(
            size_parameter=SIZE_PARAMETER,
            interleaving_depth=depth,
            prob_of_error=PROB_OF_ERROR,
            prob_good_to_bad=float(p_gb),
            prob_bad_to_good=PROB_BAD_TO_GOOD,
            extended=extended,
            seed=SEED + i,
        )
        wer[i] = word_error_rate(config, N_BLOCKS)
    return wer


def main() -> None:
    """Run the sweep and plot the result."""
    prob_good_to_bad = np.linspace(0.01, 0.3, 8)
    wer_by_depth = {depth: sweep(prob_good_to_bad, depth) for depth in DEPTHS}

    plot_word_error_rate(
        prob_good_to_bad,
        wer_by_depth,
        title=f"Hamming [{2**SIZE_PARAMETER - 1},{2**SIZE_PARAMETER - 1 - SIZE_PARAMETER}] "
        f"over a two-state channel (p_err={PROB_OF_ERROR}, p_bg={PROB_BAD_TO_GOOD})",
    )

    output_path = "examples/wer_vs_burst.png"
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    print(f"\nPlot saved to: {output_path}")

    print(f"\n{'P(G->B)':<10}" + "".join(f"{'depth ' + str(d):<12}" for d in DEPTHS))
    for i, p_gb in enumerate(prob_good_to_bad):
        print(f"{p_gb:<10.3f}" + "".join(f"{wer_by_depth[d][i]:<12.3e}" for d in DEPTHS))

    plt.show()


if __name__ == "__main__":
    main()
