"""Hashing primitives for storage key derivation.

This module provides the seeded xxHash64 lane digest used for
identifiers and the per-argument hasher transforms.
"""
