# ShaVault Test Suite
"""
Test suite including:
- Unit tests (compression function, padding, hashing, HMAC)
- Integration tests (engine, self test, CLI)
- Security tests (internal faults, avalanche, invalid input types)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
