"""
Track module - Coaster centerline generation.

This module contains:
- TrackPoint: Point with orthonormal frame
- TrackGenerator: Prefix, random body and suffix composition
- Segment primitives appending to a TrackPath
- Resampling to a uniform step
"""

from coastergen.track.frame import TrackPoint, make_point
from coastergen.track.elements import CoasterType, TrackElementType
from coastergen.track.path import TrackPath
from coastergen.track.generator import (
    GenerationRequest,
    GenerationResult,
    GeneratorConfig,
    TrackGenerator,
)

__all__ = [
    "TrackPoint",
    "make_point",
    "CoasterType",
    "TrackElementType",
    "TrackPath",
    "GenerationRequest",
    "GenerationResult",
    "GeneratorConfig",
    "TrackGenerator",
]
