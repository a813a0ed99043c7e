"""Parity-check and generator matrix construction for binary Hamming codes.

The parity-check matrix H holds the binary representations of the integers
1..n (n = 2^m - 1) as rows. Integers that are not powers of two (data
positions) are placed first in ascending order; powers of two (check
positions) are placed at the end, counted backwards. Since the integers are
not stored in their natural order, the builder also records where each one
ended up. Decoding relies on that table to turn a syndrome back into a bit
index.

Source: https://en.wikipedia.org/wiki/Hamming_code#General_algorithm
"""

from dataclasses import dataclass

import numpy as np

MIN_SIZE_PARAMETER = 2


def is_power_of_two(value: int) -> bool:
    """Return True if a positive integer is a power of two."""
    return value & (value - 1) == 0


def int_to_bits(value: int, width: int) -> np.ndarray:
    """Convert an integer to a fixed-width big-endian bit array."""
    return np.array([(value >> (width - 1 - i)) & 1 for i in range(width)], dtype=np.uint8)


def bits_to_int(bits: np.ndarray) -> int:
    """Interpret a big-endian bit array as an unsigned integer."""
    result = 0
    for b in bits:
        result = (result << 1) | int(b)
    return result


def syndrome(word: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Multiply a word with a parity-check matrix over GF(2)."""
    bits = np.asarray(word, dtype=int)
    if bits.ndim != 1 or bits.shape[0] != matrix.shape[0]:
        msg = f"Word of shape {bits.shape} does not match matrix with {matrix.shape[0]} rows"
        raise ValueError(msg)
    return (bits @ matrix.astype(int) % 2).astype(np.uint8)


def gf2_matmul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Matrix product over GF(2)."""
    return (a.astype(int) @ b.astype(int) % 2).astype(np.uint8)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class CodeMatrices:
    """Matrices and bookkeeping of a Hamming code with size parameter m."""

    size_parameter: int
    parity_check: np.ndarray  # n x m
    generator: np.ndarray  # k x n
    position_mapping: np.ndarray  # construction index (integer - 1) -> row of H

    @property
    def total_length(self) -> int:
        """Codeword length n = 2^m - 1."""
        return self.parity_check.shape[0]

    @property
    def data_length(self) -> int:
        """Source word length k = n - m."""
        return self.total_length - self.size_parameter


def _parity_check_matrix(m: int) -> tuple[np.ndarray, np.ndarray]:
    """Build H and the integer-to-row mapping."""
    n = (1 << m) - 1
    h_mat = np.zeros((n, m), dtype=np.uint8)
    mapping = np.zeros(n, dtype=np.intp)

    next_data_row = 0
    next_check_row = n - 1
    for value in range(1, n + 1):
        if is_power_of_two(value):
            row = next_check_row
            next_check_row -= 1
        else:
            row = next_data_row
            next_data_row += 1
        h_mat[row] = int_to_bits(value, m)
        mapping[value - 1] = row

    return h_mat, mapping


def _generator_matrix(h_mat: np.ndarray, m: int) -> np.ndarray:
    """Build the systematic generator [I_k | H_data] from H."""
    n = h_mat.shape[0]
    k = n - m
    return np.hstack([np.eye(k, dtype=np.uint8), h_mat[:k]])


def build_code_matrices(m: int) -> CodeMatrices:
    """Construct H, G and the position mapping for size parameter m."""
    if m < MIN_SIZE_PARAMETER:
        msg = f"Size parameter must be at least {MIN_SIZE_PARAMETER}, got {m}"
        raise ValueError(msg)

    h_mat, mapping = _parity_check_matrix(m)
    g_mat = _generator_matrix(h_mat, m)

    return CodeMatrices(
        size_parameter=m,
        parity_check=_read_only(h_mat),
        generator=_read_only(g_mat),
        position_mapping=_read_only(mapping),
    )
