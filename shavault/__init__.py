# ShaVault
"""
From-scratch SHA-256 (FIPS 180-3) and HMAC-SHA256 (RFC 2104).
"""

__version__ = "0.1.0"
