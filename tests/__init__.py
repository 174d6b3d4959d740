# shastream Test Suite
"""
Test suite including:
- Unit tests (known-answer vectors, compression, digest type)
- Streaming tests (chunking, padding boundaries, reuse)
- Security tests (misuse, invalid inputs, bit flips)
- Property tests (hypothesis; skipped when it is not installed)

Run with: pytest
"""
