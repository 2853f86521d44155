# Core Cryptography Module
"""
Core cryptographic implementations including:
- SHA-256 compression function (compression)
- SHA-256 message padding and hashing (sha256)
- HMAC-SHA256 (hmac_sha256)
- Stateful hash engine (engine)
- Known-answer and cross-check self tests (self_test)
- Internal fault exceptions (errors)
"""
