"""
Track generator - Procedural roller-coaster layout composition.

Generates:
- A fixed station and lift hill prefix
- A random body of elements allowed by the coaster type
- A fixed brake run suffix
- The final path, resampled to the output step
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple
import logging
import numpy as np

from coastergen.track.elements import (
    CoasterType,
    TrackElementType,
    normalize_elements,
    parse_coaster_type,
    substitute_element,
)
from coastergen.track.frame import TrackPoint
from coastergen.track.path import TrackPath
from coastergen.track.primitives import (
    INTERNAL_STEP,
    add_camelback,
    add_straight,
    add_transition,
    add_turn,
    add_vertical_loop,
    add_zero_g_roll,
)
from coastergen.track.resample import needs_resampling, resample, resolve_step


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """Parameters for one generation run."""
    seed: int = 0
    target_length_m: float = 800.0
    coaster_type: CoasterType = CoasterType.STEEL
    allowed_elements: Tuple[TrackElementType, ...] = tuple(TrackElementType)
    intensity: float = 0.5             # 0.0 = gentle, 1.0 = tight and banked
    use_fixed_preset: bool = True      # Export preset step instead of requested
    requested_step_m: float = 1.0

    def __post_init__(self):
        """Validate and normalize the request."""
        for name in ("target_length_m", "requested_step_m", "intensity"):
            if not np.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")
        if self.target_length_m <= 0:
            raise ValueError(f"target length must be positive, got {self.target_length_m}")
        if self.requested_step_m <= 0:
            raise ValueError(f"sample step must be positive, got {self.requested_step_m}")

        elements = normalize_elements(self.allowed_elements)
        object.__setattr__(self, "seed", int(self.seed))
        object.__setattr__(self, "coaster_type", parse_coaster_type(self.coaster_type))
        object.__setattr__(self, "allowed_elements", elements)
        object.__setattr__(self, "intensity", float(np.clip(self.intensity, 0.0, 1.0)))


@dataclass
class GeneratorConfig:
    """Layout constants for composition."""
    # Prefix
    station_length_m: float = 35.0
    pre_lift_length_m: float = 18.0
    lift_transition_m: float = 10.0
    lift_straight_m: float = 50.0
    lift_slope: float = 0.08           # ~4.5 degrees

    # Suffix
    end_transition_m: float = 15.0
    end_straight_m: float = 25.0

    # Body stop condition
    end_margin_m: float = 25.0         # Body stops this short of the target
    min_body_length_m: float = 50.0    # Body always adds at least this much
    max_body_iterations: int = 1000    # Hard cap on body elements

    # Intensity scaling
    footprint_shrink: float = 0.3      # Element size shrinks up to 30%
    bank_base: float = 0.5
    bank_gain: float = 1.0

    # Base element dimensions (meters / degrees)
    straight_length_m: float = 20.0
    hill_length_m: float = 50.0
    hill_height_m: float = 30.0
    dip_length_m: float = 30.0
    dip_depth_m: float = 10.0
    turn_length_m: float = 40.0
    turn_angle_deg: float = 90.0
    turn_bank_deg: float = 45.0
    helix_length_m: float = 100.0
    helix_angle_deg: float = 360.0
    helix_bank_deg: float = 60.0
    hop_length_m: float = 20.0
    hop_height_m: float = 10.0
    loop_height_m: float = 40.0
    roll_length_m: float = 50.0

    @property
    def prefix_length_m(self) -> float:
        return (
            self.station_length_m
            + self.pre_lift_length_m
            + 2 * self.lift_transition_m
            + self.lift_straight_m
        )

    @property
    def suffix_length_m(self) -> float:
        return self.end_transition_m + self.end_straight_m


@dataclass
class GenerationResult:
    """Output of one generation run."""
    points: List[TrackPoint] = field(default_factory=list)
    actual_step_m: float = INTERNAL_STEP

    # Diagnostics
    nominal_length_m: float = 0.0      # Sum of primitive lengths
    body_elements: List[TrackElementType] = field(default_factory=list)
    iterations: int = 0
    capped: bool = False               # Body hit the iteration cap
    resampled: bool = False
    use_fixed_preset: bool = False

    @property
    def num_points(self) -> int:
        return len(self.points)

    @property
    def estimated_length_m(self) -> float:
        """Point count times step."""
        return len(self.points) * self.actual_step_m

    @property
    def height_range(self) -> Tuple[float, float]:
        """Lowest and highest point on the track."""
        if not self.points:
            return (0.0, 0.0)
        heights = self.positions()[:, 1]
        return (float(heights.min()), float(heights.max()))

    def positions(self) -> np.ndarray:
        """Get positions as an (N, 3) array."""
        if not self.points:
            return np.zeros((0, 3))
        return np.array([p.position for p in self.points])

    def get_state(self) -> dict:
        """Get run statistics for display or serialization.

        Returns:
            Dictionary of statistics
        """
        min_y, max_y = self.height_range
        return {
            "num_points": self.num_points,
            "estimated_length_m": self.estimated_length_m,
            "nominal_length_m": self.nominal_length_m,
            "min_height_m": min_y,
            "max_height_m": max_y,
            "step_m": self.actual_step_m,
            "preset": self.use_fixed_preset,
            "body_elements": [e.value for e in self.body_elements],
            "capped": self.capped,
        }


def make_rng(seed: int) -> np.random.Generator:
    """Seeded PCG64 generator.

    Negative seeds map to their unsigned 64-bit two's complement.
    """
    return np.random.Generator(np.random.PCG64(int(seed) & 0xFFFFFFFFFFFFFFFF))


def pick_element(
    rng: np.random.Generator,
    allowed: Sequence[TrackElementType],
    coaster_type: CoasterType,
) -> TrackElementType:
    """Draw one body element and apply the coaster type's substitutions.

    Consumes exactly one integer draw from ``rng``.

    Args:
        rng: Random generator
        allowed: Non-empty ordered element kinds
        coaster_type: Coaster family

    Returns:
        Element kind to build
    """
    kind = allowed[int(rng.integers(len(allowed)))]
    return substitute_element(kind, coaster_type)


class TrackGenerator:
    """Procedural roller-coaster track generator.

    Builds a station and lift prefix, a random body sized to the target
    length and a brake run, then resamples to the output step.

    Usage:
        generator = TrackGenerator()
        result = generator.generate(GenerationRequest(seed=42))
    """

    def __init__(self, config: GeneratorConfig | None = None):
        """Initialize generator with optional configuration.

        Args:
            config: Layout constants. Uses defaults if None.
        """
        self.config = config or GeneratorConfig()

    def generate(
        self,
        request: GenerationRequest,
        rng: np.random.Generator | None = None,
    ) -> GenerationResult:
        """Generate a track.

        Args:
            request: Generation parameters
            rng: Random generator. Seeded from ``request.seed`` if None.

        Returns:
            Generated points and the step they are spaced at
        """
        if rng is None:
            rng = make_rng(request.seed)

        path = TrackPath()
        result = GenerationResult(use_fixed_preset=request.use_fixed_preset)

        self._build_prefix(path)
        self._build_body(path, request, rng, result)
        self._build_suffix(path)

        result.nominal_length_m = path.length

        step = resolve_step(request.use_fixed_preset, request.requested_step_m)
        raw = list(path.points)
        if needs_resampling(step, request.use_fixed_preset):
            result.points = resample(raw, step)
            result.actual_step_m = step
            result.resampled = True
        else:
            result.points = raw
            result.actual_step_m = INTERNAL_STEP

        logger.info(
            "Generated seed=%d type=%s: %d points, nominal %.1f m, step %.3f m",
            request.seed,
            request.coaster_type.value,
            result.num_points,
            result.nominal_length_m,
            result.actual_step_m,
        )
        return result

    def _build_prefix(self, path: TrackPath) -> None:
        """Station, pre-lift and lift hill."""
        cfg = self.config
        add_straight(path, cfg.station_length_m)
        add_straight(path, cfg.pre_lift_length_m)

        add_transition(path, cfg.lift_transition_m, 0.0, cfg.lift_slope)
        add_straight(path, cfg.lift_straight_m)
        add_transition(path, cfg.lift_transition_m, 0.0, 0.0)

    def _build_body(
        self,
        path: TrackPath,
        request: GenerationRequest,
        rng: np.random.Generator,
        result: GenerationResult,
    ) -> None:
        """Random elements until the length goal or the iteration cap."""
        cfg = self.config
        goal = max(
            request.target_length_m - cfg.end_margin_m,
            path.length + cfg.min_body_length_m,
        )

        iterations = 0
        while path.length < goal and iterations < cfg.max_body_iterations:
            kind = pick_element(rng, request.allowed_elements, request.coaster_type)
            self._add_element(path, kind, request.intensity)
            result.body_elements.append(kind)
            iterations += 1
            logger.debug("Body element %d: %s (%.1f m)", iterations, kind.value, path.length)

        result.iterations = iterations
        if path.length < goal:
            result.capped = True
            logger.warning(
                "Body stopped at iteration cap %d with %.1f of %.1f m",
                cfg.max_body_iterations,
                path.length,
                goal,
            )

    def _build_suffix(self, path: TrackPath) -> None:
        """Level out and brake run."""
        add_transition(path, self.config.end_transition_m, 0.0, 0.0)
        add_straight(path, self.config.end_straight_m)

    def _add_element(
        self,
        path: TrackPath,
        kind: TrackElementType,
        intensity: float,
    ) -> None:
        """Append the primitives for one body element.

        Higher intensity shrinks the element footprint and raises the
        peak bank.
        """
        cfg = self.config
        scale = 1.0 - intensity * cfg.footprint_shrink
        bank = cfg.bank_base + intensity * cfg.bank_gain

        if kind == TrackElementType.STRAIGHT:
            add_straight(path, cfg.straight_length_m * scale)
        elif kind == TrackElementType.HILL:
            add_camelback(path, cfg.hill_length_m * scale, cfg.hill_height_m * scale)
        elif kind == TrackElementType.SMALL_DIP:
            add_camelback(path, cfg.dip_length_m * scale, -cfg.dip_depth_m * scale)
        elif kind == TrackElementType.BANKED_TURN:
            add_turn(path, cfg.turn_length_m * scale, cfg.turn_angle_deg, cfg.turn_bank_deg * bank)
        elif kind == TrackElementType.HELIX:
            add_turn(path, cfg.helix_length_m * scale, cfg.helix_angle_deg, cfg.helix_bank_deg * bank)
        elif kind == TrackElementType.BUNNY_HOPS:
            add_camelback(path, cfg.hop_length_m * scale, cfg.hop_height_m * scale)
            add_camelback(path, cfg.hop_length_m * scale, cfg.hop_height_m * scale)
        elif kind == TrackElementType.LOOP:
            add_vertical_loop(path, cfg.loop_height_m * scale)
        elif kind == TrackElementType.ZERO_G_ROLL:
            add_zero_g_roll(path, cfg.roll_length_m * scale)

    def generate_with_seed(self, seed: int, request: GenerationRequest) -> GenerationResult:
        """Generate a track with a specific seed.

        Args:
            seed: Random seed, overriding ``request.seed``
            request: Other generation parameters

        Returns:
            Generation result
        """
        return self.generate(GenerationRequest(
            seed=seed,
            target_length_m=request.target_length_m,
            coaster_type=request.coaster_type,
            allowed_elements=request.allowed_elements,
            intensity=request.intensity,
            use_fixed_preset=request.use_fixed_preset,
            requested_step_m=request.requested_step_m,
        ))


def generate(
    seed: int,
    target_length: float,
    coaster_type: CoasterType = CoasterType.STEEL,
    allowed_elements: Iterable | None = None,
    intensity: float = 0.5,
    use_fixed_preset: bool = True,
    requested_step: float = 1.0,
) -> Tuple[List[TrackPoint], float]:
    """Generate a track and return its points and step.

    Args:
        seed: Random seed
        target_length: Target track length in meters
        coaster_type: Coaster family
        allowed_elements: Element kinds to draw from (None = all, empty = straights)
        intensity: 0..1 element tightness and banking
        use_fixed_preset: Use the export preset step
        requested_step: Step used when the preset is off

    Returns:
        Tuple of (points, actual_step)
    """
    request = GenerationRequest(
        seed=seed,
        target_length_m=target_length,
        coaster_type=coaster_type,
        allowed_elements=tuple(TrackElementType if allowed_elements is None else allowed_elements),
        intensity=intensity,
        use_fixed_preset=use_fixed_preset,
        requested_step_m=requested_step,
    )
    result = TrackGenerator().generate(request)
    return result.points, result.actual_step_m
