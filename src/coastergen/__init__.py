"""
coastergen - Procedural roller-coaster track generator.

This package builds the centerline of a coaster from a handful of
parameters and exports it for the NoLimits 2 track editor:
- Orthonormal track frames along a composed curve
- Segment primitives: straights, transitions, turns, camelbacks, loops, rolls
- Seeded random composition constrained by coaster type
- Uniform arc-length resampling
- Tab-separated point table export
"""

__version__ = "0.1.0"

from coastergen.track.generator import TrackGenerator, GenerationRequest, generate
from coastergen.export.nl2_csv import export_bytes, export_text

__all__ = [
    "TrackGenerator",
    "GenerationRequest",
    "generate",
    "export_bytes",
    "export_text",
    "__version__",
]
