"""Utility functions for musparser."""

from musparser.utils.varlen import encode_varlen, decode_varlen, read_varlen

__all__ = [
    "encode_varlen",
    "decode_varlen",
    "read_varlen",
]
