# Core Cryptography Module
"""
Core cryptographic implementations including:
- SHA-256 block compression (FIPS 180-4) - sha256.py
- Streaming SHA-256 context (initialize / update / finalize) - sha256.py
- One-shot helpers (calculate, sha256, sha256_hex) - sha256.py
"""

from .sha256 import (
    Sha256Context,
    Sha256Digest,
    ContextStateError,
    compress,
    initialize,
    update,
    finalize,
    calculate,
    calculate_chunks,
    sha256,
    sha256_hex,
    sha256_string,
    BLOCK_SIZE,
    DIGEST_SIZE,
    H_INITIAL,
    K,
)

__all__ = [
    # Context
    'Sha256Context',
    'Sha256Digest',
    'ContextStateError',
    # Operations
    'compress',
    'initialize',
    'update',
    'finalize',
    'calculate',
    'calculate_chunks',
    # Convenience
    'sha256',
    'sha256_hex',
    'sha256_string',
    # Constants
    'BLOCK_SIZE',
    'DIGEST_SIZE',
    'H_INITIAL',
    'K',
]
