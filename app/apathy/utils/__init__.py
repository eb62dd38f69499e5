"""Utility modules for apathy.

This module exports commonly used utility functions.
"""

from apathy.utils.formatting import (
    console,
    create_listing_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_listing_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
