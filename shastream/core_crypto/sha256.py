"""
SHA-256 Hash Implementation (Streaming)

Implements the SHA-256 cryptographic hash function as defined in FIPS 180-4.
The algorithm is built from scratch (no hashlib) around an incremental
context, so input can be absorbed in chunks of any size.

Components:
- Message Schedule: Expands 16 words to 64 words
- Compression: 64 rounds folding one 64-byte block into the state
- Context: Buffers partial blocks, pads the message at finalization
- Output: 256-bit (32-byte) digest

Usage:
    >>> ctx = initialize()
    >>> update(ctx, b"ab")
    >>> update(ctx, b"c")
    >>> finalize(ctx).hex()
    'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
"""

import logging
import struct
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union


BytesLike = Union[bytes, bytearray, memoryview]
HashState = Tuple[int, int, int, int, int, int, int, int]

# Sizes (bytes)
BLOCK_SIZE = 64
DIGEST_SIZE = 32
LENGTH_FIELD_SIZE = 8                            # 64-bit message bit length
PAD_BOUNDARY = BLOCK_SIZE - LENGTH_FIELD_SIZE    # 448 bits

# Masks for 32-bit and 64-bit arithmetic
MASK_32 = 0xFFFFFFFF
MASK_64 = 0xFFFFFFFFFFFFFFFF

# Initial hash values: first 32 bits of fractional parts of square roots of first 8 primes
H_INITIAL: HashState = (
    0x6a09e667, 0xbb67ae85, 0x3c6ef372, 0xa54ff53a,
    0x510e527f, 0x9b05688c, 0x1f83d9ab, 0x5be0cd19
)

# Round constants: first 32 bits of fractional parts of cube roots of first 64 primes
K = (
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2
)

_BLOCK_WORDS = struct.Struct('>16I')
_DIGEST_WORDS = struct.Struct('>8I')


class ContextStateError(RuntimeError):
    """Raised when a finalized context is used without re-initialization."""
    pass


# ============================================================================
# Bitwise functions (FIPS 180-4, section 4.1.2)
# ============================================================================

def _right_rotate(value: int, amount: int) -> int:
    """Right rotate a 32-bit integer by the specified amount."""
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _ch(x: int, y: int, z: int) -> int:
    """Choice function: if x then y else z (bitwise)."""
    return ((x & y) ^ (~x & z)) & MASK_32


def _maj(x: int, y: int, z: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def _sigma0(x: int) -> int:
    """Lowercase sigma 0: used in message schedule."""
    return _right_rotate(x, 7) ^ _right_rotate(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    """Lowercase sigma 1: used in message schedule."""
    return _right_rotate(x, 17) ^ _right_rotate(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    """Uppercase Sigma 0: used in compression."""
    return _right_rotate(x, 2) ^ _right_rotate(x, 13) ^ _right_rotate(x, 22)


def _big_sigma1(x: int) -> int:
    """Uppercase Sigma 1: used in compression."""
    return _right_rotate(x, 6) ^ _right_rotate(x, 11) ^ _right_rotate(x, 25)


# ============================================================================
# Block compressor
# ============================================================================

def _create_message_schedule(block: BytesLike) -> List[int]:
    """
    Expand a 64-byte block into the 64-word message schedule.

    W[0..15] are the block's big-endian words. For i from 16 to 63:
        W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    """
    w = list(_BLOCK_WORDS.unpack(block))
    for i in range(16, 64):
        s0 = _sigma0(w[i - 15])
        s1 = _sigma1(w[i - 2])
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK_32)
    return w


def compress(state: HashState, block: BytesLike) -> HashState:
    """
    Fold one 64-byte block into the hash state (64 rounds).

    Pure function: the input state is not modified.

    Args:
        state: Current hash state (8 32-bit words, a..h)
        block: Exactly 64 bytes of message

    Returns:
        New hash state

    Raises:
        ValueError: If state is not 8 words or block is not 64 bytes
    """
    if len(state) != 8:
        raise ValueError("Hash state must contain 8 words")
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Block must be {BLOCK_SIZE} bytes, got {len(block)}")

    w = _create_message_schedule(block)

    # Initialize working variables
    a, b, c, d, e, f, g, h = state

    # 64 rounds
    for i in range(64):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[i] + w[i]) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32

        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

    # Add compressed chunk to current hash value
    return (
        (state[0] + a) & MASK_32,
        (state[1] + b) & MASK_32,
        (state[2] + c) & MASK_32,
        (state[3] + d) & MASK_32,
        (state[4] + e) & MASK_32,
        (state[5] + f) & MASK_32,
        (state[6] + g) & MASK_32,
        (state[7] + h) & MASK_32,
    )


# ============================================================================
# Digest
# ============================================================================

@dataclass(frozen=True)
class Sha256Digest:
    """
    Immutable 256-bit digest.

    Layout: words a..h of the final state, each big-endian.
    """
    value: bytes

    def __post_init__(self):
        value = bytes(self.value)
        if len(value) != DIGEST_SIZE:
            raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(value)}")
        object.__setattr__(self, 'value', value)

    @classmethod
    def from_hex(cls, text: str) -> 'Sha256Digest':
        """Parse a 64-character hexadecimal digest."""
        return cls(bytes.fromhex(text))

    def hex(self) -> str:
        """Get the digest as a hexadecimal string."""
        return self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value

    def __len__(self) -> int:
        return DIGEST_SIZE

    def __str__(self) -> str:
        return self.hex()


# ============================================================================
# Streaming context
# ============================================================================

def _as_byte_view(data: BytesLike) -> memoryview:
    """View caller data as flat unsigned bytes without copying."""
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError(
            f"Object of type {type(data).__name__} is not bytes-like"
        ) from None
    if view.format != 'B' or view.ndim != 1:
        view = view.cast('B')
    return view


class Sha256Context:
    """
    Incremental SHA-256 hasher.

    Bytes passed to update() are copied into an internal 64-byte buffer or
    compressed directly as full blocks; no reference to caller data is kept
    after update() returns. After finalize() the context must be reset with
    initialize() before it can absorb data again.

    A context must not be shared between concurrent callers. Use one
    context per independent hash.

    Example:
        >>> ctx = Sha256Context()
        >>> ctx.update(b"hello ")
        >>> ctx.update(b"world")
        >>> ctx.finalize().hex()
        'b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9'
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Create a context reset to the initial hash state.

        Args:
            logger: Optional logger (defaults to this module's logger)
        """
        self._log = logger or logging.getLogger(__name__)
        self._buffer = bytearray(BLOCK_SIZE)
        self.initialize()

    def initialize(self) -> None:
        """Reset to the initial state. Valid on a used or finalized context."""
        self._state: HashState = H_INITIAL
        self._total_length = 0
        self._buffer[:] = bytes(BLOCK_SIZE)
        self._buffer_used = 0
        self._blocks_compressed = 0
        self._finalized = False
        self._log.debug("SHA-256 context initialized")

    @property
    def state(self) -> HashState:
        """Current hash state (a..h)."""
        return self._state

    @property
    def total_length(self) -> int:
        """Number of bytes absorbed since the last initialize()."""
        return self._total_length

    @property
    def buffer_used(self) -> int:
        """Number of bytes waiting in the partial-block buffer."""
        return self._buffer_used

    @property
    def is_finalized(self) -> bool:
        """Check if finalize() has run since the last initialize()."""
        return self._finalized

    def _require_active(self, operation: str) -> None:
        if self._finalized:
            raise ContextStateError(
                f"Cannot {operation}() a finalized context. Call initialize() first."
            )

    def _compress_block(self, block: BytesLike) -> None:
        self._state = compress(self._state, block)
        self._blocks_compressed += 1

    def update(self, data: BytesLike) -> None:
        """
        Absorb data into the hash.

        Args:
            data: Bytes-like object of any length, including empty

        Raises:
            TypeError: If data is not bytes-like
            ContextStateError: If the context has been finalized
        """
        self._require_active("update")
        view = _as_byte_view(data)
        length = len(view)
        offset = 0

        # Complete a partially filled buffer first
        if self._buffer_used and length >= BLOCK_SIZE - self._buffer_used:
            offset = BLOCK_SIZE - self._buffer_used
            self._buffer[self._buffer_used:] = view[:offset]
            self._compress_block(self._buffer)
            self._buffer_used = 0

        # Full blocks bypass the buffer
        while length - offset >= BLOCK_SIZE:
            self._compress_block(view[offset:offset + BLOCK_SIZE])
            offset += BLOCK_SIZE

        # Keep the tail for the next call
        tail = length - offset
        if tail:
            self._buffer[self._buffer_used:self._buffer_used + tail] = view[offset:]
            self._buffer_used += tail

        self._total_length += length

    def finalize(self) -> Sha256Digest:
        """
        Pad the message, compress the final block(s) and return the digest.

        Padding rules:
        1. Append bit '1' to message (0x80 byte)
        2. Append zeros until length ≡ 448 (mod 512)
        3. Append original message length as 64-bit big-endian integer

        Returns:
            256-bit digest

        Raises:
            ContextStateError: If the context has already been finalized
        """
        self._require_active("finalize")

        # Bit length of the message before padding
        bit_length = (self._total_length * 8) & MASK_64

        used = self._buffer_used
        self._buffer[used] = 0x80
        used += 1

        # No room left for the length field: pad out and start a fresh block
        if used > PAD_BOUNDARY:
            self._buffer[used:] = bytes(BLOCK_SIZE - used)
            self._compress_block(self._buffer)
            used = 0

        self._buffer[used:PAD_BOUNDARY] = bytes(PAD_BOUNDARY - used)
        self._buffer[PAD_BOUNDARY:] = bit_length.to_bytes(LENGTH_FIELD_SIZE, byteorder='big')
        self._compress_block(self._buffer)

        digest = Sha256Digest(_DIGEST_WORDS.pack(*self._state))

        # Do not retain message bytes once the digest is out
        self._buffer[:] = bytes(BLOCK_SIZE)
        self._buffer_used = 0
        self._finalized = True

        self._log.debug(
            "SHA-256 finalized: %d bytes, %d blocks compressed",
            self._total_length, self._blocks_compressed
        )
        return digest

    def copy(self) -> 'Sha256Context':
        """
        Create an independent copy of an in-progress context.

        Useful for taking the digest of a running prefix while continuing
        to absorb data into the original.

        Raises:
            ContextStateError: If the context has been finalized
        """
        self._require_active("copy")
        clone = Sha256Context.__new__(Sha256Context)
        clone._log = self._log
        clone._state = self._state
        clone._total_length = self._total_length
        clone._buffer = bytearray(self._buffer)
        clone._buffer_used = self._buffer_used
        clone._blocks_compressed = self._blocks_compressed
        clone._finalized = False
        return clone


# ============================================================================
# Public functions
# ============================================================================

def initialize() -> Sha256Context:
    """Create a new context set to the initial hash state."""
    return Sha256Context()


def update(context: Sha256Context, data: BytesLike) -> None:
    """Absorb data into the context (see Sha256Context.update)."""
    context.update(data)


def finalize(context: Sha256Context) -> Sha256Digest:
    """Finish the hash and return the digest (see Sha256Context.finalize)."""
    return context.finalize()


def calculate(data: BytesLike) -> Sha256Digest:
    """
    Compute the SHA-256 digest of data in one call.

    Args:
        data: Input bytes to hash

    Returns:
        256-bit digest
    """
    context = Sha256Context()
    context.update(data)
    return context.finalize()


def calculate_chunks(chunks: Iterable[BytesLike]) -> Sha256Digest:
    """
    Compute the SHA-256 digest of a sequence of chunks.

    The chunks are hashed as if concatenated, without joining them in memory.

    Args:
        chunks: Iterable of bytes-like chunks (e.g. a generator)

    Returns:
        256-bit digest
    """
    context = Sha256Context()
    for chunk in chunks:
        context.update(chunk)
    return context.finalize()


def sha256(data: BytesLike) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Args:
        data: Input bytes to hash

    Returns:
        256-bit (32-byte) digest as bytes

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return calculate(data).value


def sha256_hex(data: BytesLike) -> str:
    """
    Compute SHA-256 hash and return as hexadecimal string.

    Args:
        data: Input bytes to hash

    Returns:
        64-character hexadecimal string
    """
    return calculate(data).hex()


def sha256_string(text: str, encoding: str = 'utf-8') -> bytes:
    """
    Compute SHA-256 hash of a string.

    Args:
        text: Input string to hash
        encoding: String encoding (default: utf-8)

    Returns:
        256-bit (32-byte) digest as bytes
    """
    return sha256(text.encode(encoding))
