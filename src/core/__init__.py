"""
Core numeric building blocks: range configuration, pair-level math
primitives, the text codec and the Decimal value object.

The library never configures logging handlers; applications do.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
