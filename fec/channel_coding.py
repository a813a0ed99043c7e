"""Hamming and extended Hamming (SEC-DED) channel coding."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

import numpy as np

from fec.code_construction import CodeMatrices, bits_to_int, build_code_matrices, syndrome

logger = logging.getLogger(__name__)


class DecodeStatus(Enum):
    """Outcome of decoding a single codeword."""

    CLEAN = 0
    CORRECTED = 1
    UNCORRECTABLE = 2


@dataclass(frozen=True)
class DecodeResult:
    """Decoded source word together with what the decoder did to get it."""

    status: DecodeStatus
    codeword: np.ndarray  # codeword after correction (or as received)
    source: np.ndarray
    position: int | None = None  # flipped bit, if any

    @property
    def corrected(self) -> bool:
        """Return True if a bit was flipped during decoding."""
        return self.status is DecodeStatus.CORRECTED


@runtime_checkable
class Codec(Protocol):
    """Protocol for a block code usable by the interleaved transmission chain."""

    @property
    def total_length(self) -> int:
        """Codeword length."""
        ...

    @property
    def data_length(self) -> int:
        """Source word length."""
        ...

    def encode(self, source: np.ndarray) -> np.ndarray:
        """Encode a source word into a codeword."""
        ...

    def decode(self, codeword: np.ndarray) -> DecodeResult:
        """Decode a (possibly corrupted) codeword."""
        ...


def _as_bits(word: np.ndarray, length: int, name: str) -> np.ndarray:
    """Validate a binary vector of the given length and return it as uint8."""
    bits = np.asarray(word)
    if bits.ndim != 1 or bits.shape[0] != length:
        msg = f"{name} must have length {length}, got shape {bits.shape}"
        raise ValueError(msg)
    if not np.all((bits == 0) | (bits == 1)):
        msg = f"{name} must be binary"
        raise ValueError(msg)
    return bits.astype(np.uint8)


class HammingCodec:
    """Single-error-correcting Hamming code [2^m - 1, 2^m - 1 - m, 3].

    Two or more errors in one codeword cannot be detected: the syndrome of
    a double error is itself a valid single-error syndrome, so the decoder
    flips a third bit and returns a wrong source word without complaint.
    """

    def __init__(self, size_parameter: int) -> None:
        """Build the code matrices for the given size parameter."""
        self.matrices: CodeMatrices = build_code_matrices(size_parameter)

    @property
    def size_parameter(self) -> int:
        """Number of check bits m."""
        return self.matrices.size_parameter

    @property
    def total_length(self) -> int:
        """Codeword length n."""
        return self.matrices.total_length

    @property
    def data_length(self) -> int:
        """Source word length k."""
        return self.matrices.data_length

    @property
    def parity_check_matrix(self) -> np.ndarray:
        """Read-only n x m parity-check matrix H."""
        return self.matrices.parity_check

    @property
    def generator_matrix(self) -> np.ndarray:
        """Read-only k x n generator matrix G."""
        return self.matrices.generator

    @property
    def position_mapping(self) -> np.ndarray:
        """Read-only mapping from syndrome value - 1 to codeword position."""
        return self.matrices.position_mapping

    def encode(self, source: np.ndarray) -> np.ndarray:
        """Encode a k-bit source word (source @ G over GF(2))."""
        bits = _as_bits(source, self.data_length, "Source word")
        return (bits.astype(int) @ self.generator_matrix.astype(int) % 2).astype(np.uint8)

    def syndrome(self, codeword: np.ndarray, matrix: np.ndarray | None = None) -> np.ndarray:
        """Compute the syndrome of a codeword against H (or another parity-check matrix)."""
        if matrix is None:
            matrix = self.parity_check_matrix
        return syndrome(codeword, matrix)

    def decode(self, codeword: np.ndarray) -> DecodeResult:
        """Correct at most one flipped bit and return the source word."""
        word = _as_bits(codeword, self.total_length, "Codeword").copy()
        error_value = bits_to_int(self.syndrome(word))

        if error_value == 0:
            return DecodeResult(DecodeStatus.CLEAN, word, word[: self.data_length].copy())

        position = int(self.position_mapping[error_value - 1])
        word[position] ^= 1
        logger.debug("Hamming decoder flipped bit %d (syndrome %d)", position, error_value)
        return DecodeResult(DecodeStatus.CORRECTED, word, word[: self.data_length].copy(), position)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"HammingCodec([{self.total_length},{self.data_length},3])"


class ExtendedHammingCodec:
    """Extended Hamming code with an overall parity bit (SEC-DED).

    The codeword is the base Hamming codeword followed by one bit of overall
    even parity. The extended parity-check matrix H' has the parity check's
    own row first (``0...0 1``) and then every base row with a trailing 1,
    so row 0 checks codeword position n and row r >= 1 checks position r - 1.
    ``row_positions`` holds that alignment.
    """

    def __init__(self, size_parameter: int) -> None:
        """Wrap a base Hamming codec and derive the extended parity-check matrix."""
        self.base = HammingCodec(size_parameter)
        n = self.base.total_length

        h_ext = np.zeros((n + 1, size_parameter + 1), dtype=np.uint8)
        h_ext[0, -1] = 1
        h_ext[1:, :-1] = self.base.parity_check_matrix
        h_ext[1:, -1] = 1
        h_ext.flags.writeable = False
        self._parity_check = h_ext

        row_positions = np.concatenate([[n], np.arange(n)]).astype(np.intp)
        row_positions.flags.writeable = False
        self.row_positions = row_positions

    @property
    def size_parameter(self) -> int:
        """Number of check bits of the base code."""
        return self.base.size_parameter

    @property
    def total_length(self) -> int:
        """Codeword length n + 1."""
        return self.base.total_length + 1

    @property
    def data_length(self) -> int:
        """Source word length k (same as the base code)."""
        return self.base.data_length

    @property
    def parity_check_matrix(self) -> np.ndarray:
        """Read-only (n + 1) x (m + 1) extended parity-check matrix H'."""
        return self._parity_check

    @property
    def generator_matrix(self) -> np.ndarray:
        """Generator matrix of the base code."""
        return self.base.generator_matrix

    def encode(self, source: np.ndarray) -> np.ndarray:
        """Encode with the base code and append the overall parity bit."""
        base_word = self.base.encode(source)
        parity = np.bitwise_xor.reduce(base_word)
        return np.append(base_word, parity).astype(np.uint8)

    def syndrome(self, codeword: np.ndarray, matrix: np.ndarray | None = None) -> np.ndarray:
        """Compute the syndrome against H' (or another matrix with rows in H' order)."""
        if matrix is None:
            matrix = self._parity_check
        word = _as_bits(codeword, self.total_length, "Codeword")
        return self.base.syndrome(word[self.row_positions], matrix)

    def decode(self, codeword: np.ndarray) -> DecodeResult:
        """Correct a single error or report a double error as uncorrectable."""
        word = _as_bits(codeword, self.total_length, "Codeword").copy()
        k = self.data_length
        s = self.syndrome(word)

        if not s.any():
            return DecodeResult(DecodeStatus.CLEAN, word, word[:k].copy())

        matches = np.flatnonzero(np.all(self._parity_check == s, axis=1))
        if len(matches) == 0:
            logger.warning("Double error detected, syndrome %s", "".join(str(b) for b in s))
            return DecodeResult(DecodeStatus.UNCORRECTABLE, word, word[:k].copy())

        position = int(self.row_positions[matches[0]])
        word[position] ^= 1
        logger.debug("Extended Hamming decoder flipped bit %d", position)
        return DecodeResult(DecodeStatus.CORRECTED, word, word[:k].copy(), position)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"ExtendedHammingCodec([{self.total_length},{self.data_length},4])"


def build_code(size_parameter: int, *, extended: bool = False) -> HammingCodec | ExtendedHammingCodec:
    """Create a Hamming codec, optionally extended to SEC-DED."""
    if extended:
        return ExtendedHammingCodec(size_parameter)
    return HammingCodec(size_parameter)
