"""
typelint

Static checks for Rust type expressions: redundant heap allocations,
wasteful wrapper compositions and types too complex to read.
"""

__version__ = "0.1.0"

from typelint.core.config import Config
from typelint.core.engine import ScanEngine, ScanReport
from typelint.core.finding import Finding

__all__ = [
    "Config",
    "Finding",
    "ScanEngine",
    "ScanReport",
]
