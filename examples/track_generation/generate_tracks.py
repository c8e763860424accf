#!/usr/bin/env python3
"""
Track Generation Example

This example demonstrates how to:
1. Generate a coaster with default settings
2. Use seeds for reproducible layouts
3. Restrict elements by coaster type
4. Change intensity and sample step
5. Export for NoLimits 2

Run with: python generate_tracks.py
"""

from collections import Counter

from coastergen.export import TrackFileWriter, WriterConfig, export_bytes, suggested_filename
from coastergen.track import CoasterType, GenerationRequest, TrackElementType, TrackGenerator


def generate_default_track():
    """Generate a track with default settings."""
    print("=" * 60)
    print("1. Default Track Generation")
    print("=" * 60)

    result = TrackGenerator().generate(GenerationRequest(seed=2024))
    state = result.get_state()

    print(f"\nPoints: {state['num_points']}")
    print(f"Est. length: {state['estimated_length_m']:.0f} m")
    print(f"Height range: {state['min_height_m']:.1f} .. {state['max_height_m']:.1f} m")
    print(f"Step: {state['step_m']:.2f} m")

    return result


def generate_seeded_tracks():
    """Generate reproducible tracks using seeds."""
    print("\n" + "=" * 60)
    print("2. Seeded Generation (Reproducible)")
    print("=" * 60)

    generator = TrackGenerator()
    request = GenerationRequest(target_length_m=600.0)

    track1 = generator.generate_with_seed(12345, request)
    track2 = generator.generate_with_seed(12345, request)
    track3 = generator.generate_with_seed(99999, request)

    print(f"\nSeed 12345 A elements: {len(track1.body_elements)}")
    print(f"Seed 12345 B elements: {len(track2.body_elements)}")
    print(f"Same layout: {track1.body_elements == track2.body_elements}")
    print(f"Seed 99999 elements: {len(track3.body_elements)}")


def generate_wooden_track():
    """Generate a wooden coaster, which swaps inversions for hills."""
    print("\n" + "=" * 60)
    print("3. Wooden Coaster")
    print("=" * 60)

    result = TrackGenerator().generate(GenerationRequest(
        seed=7,
        target_length_m=1200.0,
        coaster_type=CoasterType.WOODEN,
    ))

    counts = Counter(e.value for e in result.body_elements)
    for name, count in sorted(counts.items()):
        print(f"  {name}: {count}")


def generate_intense_track():
    """Generate a tight, heavily banked track at a custom step."""
    print("\n" + "=" * 60)
    print("4. High Intensity, 2 m Step")
    print("=" * 60)

    result = TrackGenerator().generate(GenerationRequest(
        seed=31,
        target_length_m=900.0,
        allowed_elements=(
            TrackElementType.BANKED_TURN,
            TrackElementType.HELIX,
            TrackElementType.BUNNY_HOPS,
        ),
        intensity=1.0,
        use_fixed_preset=False,
        requested_step_m=2.0,
    ))

    print(f"\nPoints: {result.num_points}")
    print(f"Step: {result.actual_step_m:.2f} m")
    print(f"Nominal length: {result.nominal_length_m:.0f} m")


def export_track(result, seed: int):
    """Write a track in the NoLimits 2 exchange format."""
    print("\n" + "=" * 60)
    print("5. Export")
    print("=" * 60)

    writer = TrackFileWriter(WriterConfig(output_dir="./tracks"))
    path = writer.save(export_bytes(result.points), suggested_filename(seed))
    print(f"\nWrote {path}")


def main():
    default_track = generate_default_track()
    generate_seeded_tracks()
    generate_wooden_track()
    generate_intense_track()
    export_track(default_track, 2024)

    print("\n" + "=" * 60)
    print("Track generation examples complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
