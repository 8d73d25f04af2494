"""
Devpost statistics CLI package.

This package contains a small CLI tool that reads a Devpost submissions CSV
export and reports how often each
- desired prize,
- team member school,
- technology used
appears across all submissions.
"""

from __future__ import annotations

__version__ = "0.1.0"
