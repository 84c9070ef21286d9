"""
Test Suite

Structure:
- tests/unit/: Tests for the signer, request pipeline, endpoints, schemas and config

Uses pytest with pytest-asyncio for testing async functionality.
"""
