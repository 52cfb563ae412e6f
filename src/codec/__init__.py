"""Argument encoding adapters.

This module turns typed values into the opaque byte encodings that
storage keys append after hashing.
"""
