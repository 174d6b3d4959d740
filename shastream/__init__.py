"""
shastream - streaming SHA-256 (FIPS 180-4) in pure Python.

    >>> from shastream import Sha256Context
    >>> ctx = Sha256Context()
    >>> ctx.update(b"abc")
    >>> ctx.finalize().hex()
    'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
"""

from .core_crypto import *  # noqa: F401,F403
from .core_crypto import __all__

__version__ = "1.0.0"
