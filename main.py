"""Run one interleaved Hamming-coded transmission and log the tables."""

import argparse
import logging

import matplotlib.pyplot as plt

from fec.channel_coding import DecodeStatus, ExtendedHammingCodec, build_code
from fec.config import SimulationConfig
from fec.plotting import plot_bit_tables
from fec.simulation import run_simulation
from fec.util import format_bit_matrix

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)


def parse_args(argv: list[str] | None = None) -> tuple[SimulationConfig, str | None]:
    """Parse command line arguments into a simulation configuration and plot path."""
    parser = argparse.ArgumentParser(description="Simulate Hamming coding over an interleaved burst channel")
    parser.add_argument("size_parameter", type=int, help="Number of check bits m (>= 2)")
    parser.add_argument("interleaving_depth", type=int, help="Codewords per interleaving table (>= 1)")
    parser.add_argument("prob_of_error", type=float, help="Bit flip probability in the BAD state")
    parser.add_argument("prob_good_to_bad", type=float, help="Probability of entering the BAD state")
    parser.add_argument("prob_bad_to_good", type=float, help="Probability of leaving the BAD state")
    parser.add_argument("--extended", action="store_true", help="Use the extended (SEC-DED) code")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: %(default)s)")
    parser.add_argument("--verbose", action="store_true", help="Log decoder and channel details")
    parser.add_argument("--plot", metavar="PATH", default=None, help="Save a plot of the sent and received block")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = SimulationConfig(
            size_parameter=args.size_parameter,
            interleaving_depth=args.interleaving_depth,
            prob_of_error=args.prob_of_error,
            prob_good_to_bad=args.prob_good_to_bad,
            prob_bad_to_good=args.prob_bad_to_good,
            extended=args.extended,
            seed=args.seed,
        )
    except ValueError as e:
        parser.error(str(e))
    return config, args.plot


def main(argv: list[str] | None = None) -> None:
    """Log the code matrices, run one block and log what came out."""
    logger = logging.getLogger(__name__)
    config, plot_path = parse_args(argv)

    codec = build_code(config.size_parameter, extended=config.extended)
    n, k, m = codec.total_length, codec.data_length, config.size_parameter
    base = codec.base if isinstance(codec, ExtendedHammingCodec) else codec
    logger.info("Parity check matrix for Hamming code [%d,%d,%d]:\n%s", base.total_length, k, m,
                format_bit_matrix(base.parity_check_matrix))
    logger.info("Generator matrix:\n%s", format_bit_matrix(base.generator_matrix))
    if isinstance(codec, ExtendedHammingCodec):
        logger.info("Parity check matrix for extended Hamming code [%d,%d,%d]:\n%s", n, k, m + 1,
                    format_bit_matrix(codec.parity_check_matrix))

    result = run_simulation(config)
    logger.info("Generated:\n%s", format_bit_matrix(result.transmitted))
    logger.info("Received:\n%s", format_bit_matrix(result.received))
    logger.info("Decoded:\n%s", format_bit_matrix(result.decoded))

    counts = result.status_counts
    logger.info(
        "%d channel bit errors, %d clean / %d corrected / %d uncorrectable, %d of %d words wrong",
        result.bit_errors,
        counts[DecodeStatus.CLEAN],
        counts[DecodeStatus.CORRECTED],
        counts[DecodeStatus.UNCORRECTABLE],
        result.word_errors,
        config.interleaving_depth,
    )

    if plot_path is not None:
        fig, _ = plot_bit_tables(result.transmitted, result.received, title=f"{codec!r}, depth {config.interleaving_depth}")
        fig.savefig(plot_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        logger.info("Plot saved to: %s", plot_path)


if __name__ == "__main__":
    main()
