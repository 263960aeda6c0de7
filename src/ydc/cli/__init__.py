"""
YDC Command-Line Interface
==========================

- **ydcc**: translate a .ydc file to C and compile it with gcc

The tool is a Click application.
"""

__all__ = ["ydcc"]
