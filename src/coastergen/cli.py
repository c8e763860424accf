"""
coastergen command line runner

Generates a coaster track and writes it in the NoLimits 2 exchange format.

Usage:
    coastergen                              # Random seed, 800 m, all elements
    coastergen --seed 42 --length 1200      # Reproducible longer track
    coastergen --coaster-type wooden        # No loops or rolls
    coastergen --no-preset --step 2.0       # Custom sample step
    coastergen --preview-json preview.json  # Also write viewer positions
"""

from pathlib import Path
from typing import List, Sequence
import argparse
import logging
import sys

import numpy as np

from coastergen.export.nl2_csv import export_bytes, suggested_filename
from coastergen.export.preview import preview_message
from coastergen.export.writer import ExportError, TrackFileWriter, WriterConfig
from coastergen.track.elements import CoasterType, TrackElementType, parse_element
from coastergen.track.generator import GenerationRequest, GenerationResult, TrackGenerator


logger = logging.getLogger(__name__)


def _element_list(value: str) -> List[TrackElementType]:
    """Parse a comma-separated element list."""
    items = [v for v in (s.strip() for s in value.split(",")) if v]
    try:
        return [parse_element(v) for v in items]
    except KeyError as exc:
        choices = ", ".join(e.value for e in TrackElementType)
        raise argparse.ArgumentTypeError(f"unknown element {exc}, choose from: {choices}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Procedural roller-coaster track generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Reproducible track with the export preset step (1.10 m)
    coastergen --seed 42 --output track.csv

    # Gentle family coaster with only hills and turns
    coastergen --coaster-type family --elements hill,banked_turn --intensity 0.2
        """
    )

    # Layout
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (default: random)"
    )
    parser.add_argument(
        "--length",
        type=float,
        default=800.0,
        dest="target_length_m",
        help="Target track length in meters (default: 800)"
    )
    parser.add_argument(
        "--coaster-type",
        choices=[c.value for c in CoasterType],
        default=CoasterType.STEEL.value,
        help="Coaster family (default: steel)"
    )
    parser.add_argument(
        "--elements",
        type=_element_list,
        default=list(TrackElementType),
        help="Comma-separated body elements (default: all)"
    )
    parser.add_argument(
        "--intensity",
        type=float,
        default=0.5,
        help="Element tightness and banking, 0..1 (default: 0.5)"
    )

    # Sampling
    parser.add_argument(
        "--no-preset",
        action="store_false",
        dest="use_fixed_preset",
        help="Use --step instead of the 1.10 m export preset"
    )
    parser.add_argument(
        "--step",
        type=float,
        default=1.0,
        dest="requested_step_m",
        help="Sample step in meters when the preset is off (default: 1.0)"
    )

    # Output
    parser.add_argument(
        "--output",
        help="Export file, .csv or .txt (default: track_<seed>.csv)"
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for relative output names (default: current directory)"
    )
    parser.add_argument(
        "--preview-json",
        type=Path,
        help="Also write the viewer position stream as JSON"
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file path (in addition to stdout)"
    )

    return parser.parse_args(argv)


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure logging."""
    log_format = "%(asctime)s [%(levelname)s] %(message)s"
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level),
        format=log_format,
        handlers=handlers
    )


def format_stats(result: GenerationResult) -> str:
    """Summary panel for a generated track."""
    state = result.get_state()
    lines = [
        f"Points: {state['num_points']}",
        f"Est. Length: {state['estimated_length_m']:.1f}m",
        f"Height Range: {state['min_height_m']:.1f}m .. {state['max_height_m']:.1f}m",
        f"Step Used: {state['step_m']:.3f}m",
        f"Preset Active: {state['preset']}",
    ]
    if result.capped:
        lines.append("Body truncated at iteration cap")
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    seed = args.seed
    if seed is None:
        seed = int(np.random.default_rng().integers(0, 2**31 - 1))

    try:
        request = GenerationRequest(
            seed=seed,
            target_length_m=args.target_length_m,
            coaster_type=CoasterType(args.coaster_type),
            allowed_elements=tuple(args.elements),
            intensity=args.intensity,
            use_fixed_preset=args.use_fixed_preset,
            requested_step_m=args.requested_step_m,
        )
    except ValueError as e:
        logger.error("Invalid parameters: %s", e)
        return 2

    result = TrackGenerator().generate(request)
    print(f"Seed: {seed}")
    print(format_stats(result))

    writer = TrackFileWriter(WriterConfig(output_dir=args.output_dir))
    try:
        path = writer.save(
            export_bytes(result.points),
            args.output or suggested_filename(seed),
        )
        if args.preview_json:
            with open(args.preview_json, "w", encoding="utf-8") as f:
                f.write(preview_message(result.points))
    except ExportError as e:
        logger.error("Export failed: %s", e)
        return 1
    except OSError as e:
        logger.error("Preview write failed: %s", e)
        return 1

    print(f"Exported: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
