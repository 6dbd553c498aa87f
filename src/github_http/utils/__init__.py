"""Utility modules for the adapter."""

from .sanitizer import (
    mask_sensitive_data,
    mask_string,
    mask_url,
    mask_header_lines,
)

__all__ = [
    'mask_sensitive_data',
    'mask_string',
    'mask_url',
    'mask_header_lines',
]
