# mdhash Test Suite
"""
Test suite including:
- Unit tests for the engine value types
- Known-answer tests per algorithm
- Streaming properties (chunking invariance, padding boundaries, reset)
- Stream helpers and command line

Run with: pytest
"""
