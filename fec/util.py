"""Text rendering of bit vectors and matrices."""

import numpy as np


def format_bit_vector(vector: np.ndarray) -> str:
    """Render a bit vector as space-separated 0/1 digits."""
    return " ".join(str(int(b)) for b in vector)


def format_bit_matrix(matrix: np.ndarray) -> str:
    """Render a bit matrix as one line of 0/1 digits per row."""
    return "\n".join(format_bit_vector(row) for row in np.atleast_2d(matrix))


def flip_bits(word: np.ndarray, *positions: int) -> np.ndarray:
    """Return a copy of a bit vector with the given positions inverted."""
    flipped = np.array(word, dtype=np.uint8)
    for p in positions:
        flipped[p] ^= 1
    return flipped
