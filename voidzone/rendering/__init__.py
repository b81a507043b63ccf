"""
Rendering Layer
===============

Bounded Context: Diagnostic images of void queries.

Responsibilities:
- Draw occupancy, region, contour and seed for one query

Non-responsibilities:
- Detection (handled by voidzone.detector)
- Writing files (handled by the CLI)
"""

from voidzone.rendering.preview import VoidPreview

__all__ = [
    "VoidPreview",
]
