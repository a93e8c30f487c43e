"""
Receipt Kernel

Pure foundation for the receipt tax engine:
- Exact decimal Money values (never float)
- Round-up rounding policy with a configurable increment
- Typed exception hierarchy
- Structured JSON logging
"""

__version__ = "0.1.0"
