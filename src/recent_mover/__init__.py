"""
Recent Mover - pick a freshly created file and move it into the current directory.

This package provides functionality to:
- Load (or create) a JSON config listing source directories and a time window
- Scan those directories for files created within the time window
- Present the candidates for a single interactive choice
- Move the chosen file into the current directory without overwriting
- Fall back to copy + delete when the move crosses filesystems
"""

__version__ = "0.1.0"
__author__ = "Recent Mover Team"
