"""Data input/output helpers.

Utility modules here keep disk-level concerns isolated from the parser:
- :mod:`line_source` yields raw packet lines from recordings.
- :mod:`csv_writer` writes packets back in the device's raw layout.
"""
