"""
Dialect configurations for declaration recognition.

Each dialect has its own module defining:
- Type, function and modifier keyword sets
- Keywords offered as static completions

Supported dialects:
- ron.py: RoN scenario scripts (.bhs)
"""

from .ron import RON_DIALECT

__all__ = [
    'RON_DIALECT',
]
