"""
Security Tests - Invalid Inputs and Misuse

Tests that the hasher:
- Fails fast on use after finalize
- Rejects non-bytes input
- Changes its digest when any input bit flips
- Drops message bytes once finalized
"""

import pytest
from shastream.core_crypto.sha256 import (
    Sha256Context, ContextStateError, calculate, update, finalize
)


class TestContextMisuse:
    """Protocol misuse must raise, not produce a wrong digest."""

    def test_update_after_finalize(self):
        """update() after finalize() raises."""
        ctx = Sha256Context()
        ctx.finalize()
        with pytest.raises(ContextStateError):
            ctx.update(b"more")

    def test_finalize_twice(self):
        """A second finalize() raises."""
        ctx = Sha256Context()
        ctx.update(b"abc")
        ctx.finalize()
        with pytest.raises(ContextStateError):
            ctx.finalize()

    def test_copy_after_finalize(self):
        """copy() of a finalized context raises."""
        ctx = Sha256Context()
        ctx.finalize()
        with pytest.raises(ContextStateError):
            ctx.copy()

    def test_module_functions_enforce_state(self):
        """The function API enforces the same protocol."""
        ctx = Sha256Context()
        finalize(ctx)
        with pytest.raises(ContextStateError):
            update(ctx, b"x")

    def test_error_is_runtime_error(self):
        """ContextStateError is a RuntimeError naming the fix."""
        ctx = Sha256Context()
        ctx.finalize()
        with pytest.raises(RuntimeError, match="initialize"):
            ctx.update(b"x")

    def test_is_finalized_flag(self):
        """is_finalized follows the lifecycle."""
        ctx = Sha256Context()
        assert not ctx.is_finalized
        ctx.finalize()
        assert ctx.is_finalized
        ctx.initialize()
        assert not ctx.is_finalized


class TestInvalidInputs:
    """Non-bytes input is rejected."""

    def test_str_rejected(self):
        """Text must be encoded first."""
        with pytest.raises(TypeError):
            calculate("abc")

    @pytest.mark.parametrize("value", [None, 123, 1.5, [1, 2, 3]])
    def test_non_buffer_rejected(self, value):
        """Objects without the buffer protocol are rejected."""
        with pytest.raises(TypeError):
            Sha256Context().update(value)

    def test_rejected_input_leaves_context_usable(self):
        """A TypeError does not corrupt the context."""
        ctx = Sha256Context()
        ctx.update(b"ab")
        with pytest.raises(TypeError):
            ctx.update("c")
        ctx.update(b"c")
        assert ctx.finalize() == calculate(b"abc")


class TestAvalanche:
    """Single bit flips change the digest."""

    def test_every_bit_of_short_message(self):
        """Flipping each bit of a 2-block message changes the digest."""
        data = bytes(range(70))
        original = calculate(data)
        for i in range(len(data)):
            for bit in range(8):
                flipped = bytearray(data)
                flipped[i] ^= 1 << bit
                assert calculate(flipped) != original

    def test_length_extension_changes_digest(self):
        """Appending a zero byte changes the digest."""
        assert calculate(b"abc") != calculate(b"abc\x00")


class TestDataRetention:
    """The context does not keep message bytes after finalize."""

    def test_buffer_cleared_on_finalize(self):
        """No buffered bytes survive finalize or leak into the next hash."""
        ctx = Sha256Context()
        ctx.update(b"password123")
        ctx.finalize()
        assert ctx.buffer_used == 0

        ctx.initialize()
        ctx.update(b"abc")
        assert ctx.buffer_used == 3
        assert ctx.finalize() == calculate(b"abc")
