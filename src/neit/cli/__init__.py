"""
Neit Command-Line Interface
===========================

- **neitc**: compile a Neit program to C and build it

Implemented as a Click application with help and error reporting.
"""

__all__ = ["neitc"]
