"""Storage key derivation and decoding.

This module builds key prefixes and full storage keys from identifiers
and encoded arguments, and walks keys back into their arguments.
"""
