# SHA-2 Module
"""
SHA-2 family on 32-bit words:
- SHA-256 (8-word state, 64 rounds) - sha256.py
- SHA-224 (SHA-256 with its own IV, 28-byte digest) - sha224.py
"""

from . import sha224, sha256

__all__ = ['sha224', 'sha256']
