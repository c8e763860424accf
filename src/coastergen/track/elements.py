"""
Track elements - Body element kinds and coaster type rules.

Defines:
- TrackElementType: kinds of body element the generator can place
- CoasterType: coaster families, which restrict the element kinds
- Substitution of forbidden elements
"""

from enum import Enum
from typing import Iterable, Tuple
import logging


logger = logging.getLogger(__name__)


class TrackElementType(Enum):
    """Types of body elements.

    Declaration order defines the order in which an allowed set is
    indexed by the random generator.
    """
    STRAIGHT = "straight"
    HILL = "hill"
    SMALL_DIP = "small_dip"
    BANKED_TURN = "banked_turn"
    HELIX = "helix"
    BUNNY_HOPS = "bunny_hops"
    LOOP = "loop"
    ZERO_G_ROLL = "zero_g_roll"


class CoasterType(Enum):
    """Coaster families."""
    STEEL = "steel"
    WOODEN = "wooden"
    INVERTED = "inverted"
    HYPER = "hyper"
    DIVE_COASTER = "dive_coaster"
    FAMILY = "family"


# Forbidden element -> replacement, per coaster type
SUBSTITUTIONS = {
    CoasterType.WOODEN: {
        TrackElementType.LOOP: TrackElementType.HILL,
        TrackElementType.ZERO_G_ROLL: TrackElementType.HILL,
    },
    CoasterType.DIVE_COASTER: {
        TrackElementType.ZERO_G_ROLL: TrackElementType.BANKED_TURN,
    },
}


def substitute_element(
    kind: TrackElementType,
    coaster_type: CoasterType,
) -> TrackElementType:
    """Replace an element the coaster type cannot build.

    Args:
        kind: Element drawn from the allowed set
        coaster_type: Coaster family

    Returns:
        The element to build
    """
    return SUBSTITUTIONS.get(coaster_type, {}).get(kind, kind)


def forbidden_elements(coaster_type: CoasterType) -> Tuple[TrackElementType, ...]:
    """Element kinds that never appear in the body for a coaster type."""
    return tuple(SUBSTITUTIONS.get(coaster_type, {}).keys())


def parse_element(value) -> TrackElementType:
    """Coerce an enum member or its value/name to a TrackElementType."""
    if isinstance(value, TrackElementType):
        return value
    text = str(value).strip()
    try:
        return TrackElementType(text.lower())
    except ValueError:
        return TrackElementType[text.upper()]


def parse_coaster_type(value) -> CoasterType:
    """Coerce an enum member or its value/name to a CoasterType."""
    if isinstance(value, CoasterType):
        return value
    text = str(value).strip()
    try:
        return CoasterType(text.lower())
    except ValueError:
        return CoasterType[text.upper()]


def normalize_elements(
    allowed: Iterable | None,
) -> Tuple[TrackElementType, ...]:
    """Order and de-duplicate an allowed element selection.

    An empty selection falls back to straights only.

    Args:
        allowed: Element kinds (members, values or names)

    Returns:
        Tuple of distinct kinds in declaration order
    """
    selected = {parse_element(e) for e in (allowed or ())}
    if not selected:
        logger.info("No elements selected, using straights only")
        return (TrackElementType.STRAIGHT,)
    return tuple(e for e in TrackElementType if e in selected)
