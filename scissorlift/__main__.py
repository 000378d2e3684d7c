"""
Main entry point for the scissor lift calculator.

Usage:
    python -m scissorlift                                   # Report for the reference design
    python -m scissorlift --load 20 --travel 300 --min-height 80 --max-angle 55
    python -m scissorlift --json                            # Calculation payload as JSON
    python -m scissorlift --plot dashboard.png              # Charts + schematic
    python -m scissorlift --config steel.json               # Alternate material/screw
    python -m scissorlift --serve --port 3000               # HTTP API
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import default_inputs
from .calculator import MechanismCalculator, Analysis
from .config import MechanismConfig, load_config
from .geometry import MechanismInputs
from .logging_config import setup_logging

logger = logging.getLogger("scissorlift")


def build_parser() -> argparse.ArgumentParser:
    defaults = default_inputs()
    parser = argparse.ArgumentParser(prog="scissorlift",
                                     description="Size a pantographic (scissor) lift table")
    parser.add_argument("--load", type=float, default=defaults.load_kg, help="Load mass (kg)")
    parser.add_argument("--width", type=float, default=defaults.width_mm, help="Platform width (mm)")
    parser.add_argument("--depth", type=float, default=defaults.depth_mm, help="Platform depth (mm)")
    parser.add_argument("--travel", type=float, default=defaults.vertical_travel_mm,
                        help="Vertical travel (mm)")
    parser.add_argument("--min-height", type=float, default=defaults.min_height_mm,
                        help="Minimum platform height (mm)")
    parser.add_argument("--max-angle", type=float, default=defaults.max_angle_deg,
                        help="Link angle at full extension (deg)")
    parser.add_argument("--steps", type=int, default=30, help="Samples across the travel range")
    parser.add_argument("--config", help="JSON file with material/screw configuration")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--plot", help="Save a dashboard PNG to this path")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API")
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind address")
    parser.add_argument("--port", type=int, default=3000, help="HTTP port")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def print_report(analysis: Analysis, config: MechanismConfig):
    """Human-readable summary of one analysis."""
    inputs = analysis.inputs
    print("=" * 70)
    print("SCISSOR LIFT SIZING")
    print("=" * 70)
    print(f"  Load:        {inputs.load_kg:g} kg")
    print(f"  Platform:    {inputs.width_mm:g} x {inputs.depth_mm:g} mm")
    print(f"  Height:      {inputs.min_height_mm:g} -> {inputs.max_height_mm:g} mm "
          f"(travel {inputs.vertical_travel_mm:g} mm)")
    print(f"  Max angle:   {inputs.max_angle_deg:g}°")

    validation = analysis.validation
    print(f"\n{'='*70}")
    print("VALIDATION")
    print("=" * 70)
    for msg in validation.errors:
        print(f"  ERROR:   {msg}")
    for msg in validation.warnings:
        print(f"  WARNING: {msg}")
    if validation.is_valid and not validation.warnings:
        print("  OK")
    if not validation.is_valid:
        return

    result = analysis.result
    if not result.ok:
        print(f"\n  CALCULATION ERROR ({result.kind}): {result.message}")
        return

    rod, screw = config.rod, config.screw
    print(f"\n{'='*70}")
    print("GEOMETRY")
    print("=" * 70)
    print(f"  Rod length L:       {result.rod_length_mm:8.1f} mm")
    print(f"  Angle range:        {result.theta_min_deg:8.2f}° -> {result.theta_max_deg:.2f}°")
    print(f"  Base span at max:   {result.x_max_mm:8.1f} mm")

    print(f"\n{'='*70}")
    print("FORCES")
    print("=" * 70)
    print("                 θ min (critical)     θ max")
    print(f"  Actuator (N)   {result.actuator_force_min:12.1f}   {result.actuator_force_max:12.1f}")
    print(f"  Link (N)       {result.rod_force_min:12.1f}   {result.rod_force_max:12.1f}")
    print(f"  Efficiency     {result.efficiency_min * 100:11.1f}%   {result.efficiency_max * 100:11.1f}%")

    print(f"\n{'='*70}")
    print("STRENGTH")
    print("=" * 70)
    print(f"  Section:            {rod.width * 1000:g} x {rod.thickness * 1000:g} mm, "
          f"I = {result.moment_of_inertia_mm4:.2f} mm⁴")
    print(f"  Critical load Pcr:  {result.critical_load_kn:8.3f} kN")
    status = "SAFE" if result.is_safe else "NOT SAFE"
    print(f"  FS buckling:        {result.buckling_safety_factor:8.2f}  "
          f"({status}, threshold {result.safety_factor_threshold:g})")

    print(f"\n{'='*70}")
    print("ACTUATOR")
    print("=" * 70)
    print(f"  Screw:              Ø{screw.nominal_diameter * 1000:g} mm, "
          f"pitch {screw.pitch * 1000:g} mm, μ = {screw.friction:g}")
    print(f"  Torque:             {result.screw_torque_mnm:8.1f} mN·m")

    if analysis.samples:
        print(f"\n{'='*70}")
        print("TRAVEL SWEEP")
        print("=" * 70)
        print("  h (mm)    θ (deg)   F_act (N)   F_rod (N)   x (mm)   η (%)")
        print("  " + "-" * 62)
        for s in analysis.samples:
            print(f"  {s.height_mm:7.1f}   {s.angle_deg:7.2f}   {s.actuator_force_n:9.1f}"
                  f"   {s.rod_force_n:9.1f}   {s.horizontal_distance_mm:6.1f}   {s.efficiency_pct:5.1f}")
    print("=" * 70)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    try:
        config = load_config(args.config) if args.config else MechanismConfig()
    except (OSError, ValueError) as e:
        logger.error(f"Could not load config {args.config}: {e}")
        return 1
    calculator = MechanismCalculator(config)

    if args.serve:
        from .service import serve
        serve(args.host, args.port, calculator)
        return 0

    inputs = MechanismInputs(load_kg=args.load, width_mm=args.width, depth_mm=args.depth,
                             vertical_travel_mm=args.travel, min_height_mm=args.min_height,
                             max_angle_deg=args.max_angle)
    analysis = calculator.analyze(inputs, steps=args.steps)
    succeeded = analysis.validation.is_valid and analysis.result.ok

    if args.json:
        print(json.dumps(analysis.to_dict(), indent=2))
    else:
        print_report(analysis, config)

    if args.plot and succeeded and analysis.samples:
        from .results import GraphCurves
        from .visualization import create_dashboard
        create_dashboard(analysis.result, GraphCurves.from_samples(analysis.samples),
                         save_path=args.plot)
        print(f"Dashboard saved to {args.plot}", file=sys.stderr)

    return 0 if succeeded else 1


if __name__ == '__main__':
    sys.exit(main())
