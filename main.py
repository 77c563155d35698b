#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  DOPE CALCULATOR — Demo Runner
═══════════════════════════════════════════════════════════════════════════════

  Walks the engine pipeline on a .308 Win 168gr load:
    1. Atmospheric conditions (standard vs. a hot, high range)
    2. G1 / G7 drag curves
    3. Zero solve at 100 yd
    4. Single firing solution with wind
    5. DOPE card, 100–1000 yd
    6. Wind table
    7. Subsonic transition analysis
    8. Incline and Coriolis effects

  Usage:
    python main.py                  # Run everything
    python main.py --quick          # Skip the wind table and long-range phases
    python main.py --config FILE    # Engine settings from FILE's [engine] table
    python main.py --verbose        # Engine DEBUG logging on the console
═══════════════════════════════════════════════════════════════════════════════
"""

import argparse
import logging
import math
import time

from dopecalc import (
    AmmoConfig, AtmosphericConditions, DEFAULT_ENGINE_CONFIG, RifleConfig, ShotParameters,
    STANDARD_ATMOSPHERE, analyze_drag, analyze_subsonic_transition, calculate_atmospheric_conditions,
    dope_table, drag_coefficient, estimate_max_supersonic_range, find_zero_angle,
    generate_wind_table, load_engine_config, logger, solve,
)
from dopecalc.drag_model import ALL_MODELS, max_drag_mach
from dopecalc.integrator import integrate_trajectory


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     DOPE CALCULATOR — EXTERIOR BALLISTICS ENGINE                      ║
║     ─────────────────────────────────────────────────────             ║
║     Atmosphere · G1/G7 Drag · Zero · RK4 · MIL/MOA · Transonic        ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def parse_args():
    parser = argparse.ArgumentParser(description="DOPE calculator demo runner")
    parser.add_argument('--quick', action='store_true', help="skip the slower phases")
    parser.add_argument('--config', help="TOML file with an [engine] table")
    parser.add_argument('--verbose', action='store_true', help="engine DEBUG logging")
    return parser.parse_args()


def main():
    args = parse_args()
    start_time = time.time()
    logging.basicConfig(format="%(levelname)s: %(message)s", level=logging.WARNING)
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    config = load_engine_config(args.config) if args.config else DEFAULT_ENGINE_CONFIG

    banner()

    rifle = RifleConfig(sight_height=1.5, zero_distance=100, twist_rate="1:10", barrel_length=24)
    ammo = AmmoConfig(muzzle_velocity=2650, ballistic_coefficient=0.462,
                      drag_model='G1', bullet_weight=168)
    hot_high = calculate_atmospheric_conditions(
        {'temperature': 95, 'pressure': 24.9, 'humidity': 30, 'altitude': 5000})

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Atmosphere
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Atmospheric Conditions")
    print(f"  {'':<12} {'T (°F)':>7} {'P (inHg)':>9} {'RH %':>5} {'DA (ft)':>8} "
          f"{'ρ/ρ0':>7} {'a (fps)':>8}")
    for label, atm in [("Standard", STANDARD_ATMOSPHERE), ("Hot & high", hot_high)]:
        print(f"  {label:<12} {atm.temperature:>7.1f} {atm.pressure:>9.2f} "
              f"{atm.humidity:>5.0f} {atm.density_altitude_display:>8d} "
              f"{atm.density_ratio:>7.4f} {atm.speed_of_sound:>8.1f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Drag curves
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Cd vs Mach")
    for key in ALL_MODELS:
        peak_mach, peak_cd = max_drag_mach(key)
        print(f"  {key}  Cd @ M0.5={drag_coefficient(0.5, key):.4f}  "
              f"Cd @ M1.0={drag_coefficient(1.0, key):.4f}  "
              f"Cd @ M2.0={drag_coefficient(2.0, key):.4f}  "
              f"peak {peak_cd:.4f} @ M{peak_mach:.3f}")
    for velocity in (2650, 1300, 1100, 850):
        print(f"  {velocity:>5} fps: {analyze_drag(velocity, 'G1', STANDARD_ATMOSPHERE.speed_of_sound).description}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Zero
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Zero at 100 yd")
    zero = find_zero_angle(rifle, ammo, STANDARD_ATMOSPHERE, config)
    print(f"  Bore angle: {zero:.6f} rad = {math.degrees(zero) * 60:.2f} MOA")
    trajectory = integrate_trajectory(ammo, zero, 1000, rifle.sight_height,
                                      atmosphere=STANDARD_ATMOSPHERE, config=config)
    print(trajectory.summary())

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Single solution
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: 600 yd, 10 mph full-value wind")
    shot = ShotParameters(distance=600, wind_speed=10, wind_direction=90)
    for label, atm in [("Standard", STANDARD_ATMOSPHERE), ("Hot & high", hot_high)]:
        print(f"  {label:<12} {solve(rifle, ammo, shot, atm, config).summary()}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: DOPE card
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: DOPE Card")
    print(f"  {'Dist':>5} {'Elev MIL':>9} {'Elev MOA':>9} {'Drop in':>8} {'Vel':>6} "
          f"{'Energy':>7} {'TOF':>6}")
    for row in dope_table(rifle, ammo, range(100, 1100, 100), config=config):
        print(f"  {row.distance:>5.0f} {row.elevation_correction.mil:>9.2f} "
              f"{row.elevation_correction.moa:>9.2f} {row.drop:>8.1f} "
              f"{row.velocity:>6.0f} {row.energy:>7.0f} {row.time_of_flight:>6.3f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Wind table
    # ══════════════════════════════════════════════════════════════════════
    if not args.quick:
        section("PHASE 6: Wind Table (MIL, full value)")
        speeds = [5, 10, 15, 20]
        table = generate_wind_table(rifle, ammo, [200, 400, 600, 800], wind_speeds=speeds,
                                    config=config, max_workers=4)
        print(f"  {'Dist':>5} " + " ".join(f"{s:>5} mph" for s in speeds))
        for i in range(0, len(table), len(speeds)):
            row = table[i:i + len(speeds)]
            print(f"  {row[0].distance:>5.0f} " + " ".join(f"{e.windage_mil:>9.2f}" for e in row))
    else:
        section("PHASE 6: Wind table SKIPPED (--quick mode)")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 7: Subsonic transition
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 7: Subsonic Transition")
    far = 1000 if args.quick else 1600
    long_shot = integrate_trajectory(ammo, zero, far, rifle.sight_height, config=config)
    for target in (800, far):
        result = analyze_subsonic_transition(long_shot, 59, target,
                                             ammo.muzzle_velocity, ammo.ballistic_coefficient)
        crossing = (f"{result.transonic_distance:.0f} yd"
                    if result.transonic_distance is not None else "none")
        print(f"  Target {target:>5} yd: {result.flight_regime.value:<10} "
              f"M{result.mach_at_target:.2f}  Mach 1 crossing: {crossing}")
        if result.warning:
            print(f"    ! {result.warning}")
    print(f"  Approx. max supersonic range: "
          f"{estimate_max_supersonic_range(ammo.muzzle_velocity, ammo.ballistic_coefficient):.0f} yd")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 8: Incline & Coriolis
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 8: Incline & Coriolis (800 yd)")
    cases = [
        ("Level", ShotParameters(distance=800)),
        ("20° uphill", ShotParameters(distance=800, angle=20)),
        ("20° downhill", ShotParameters(distance=800, angle=-20)),
        ("45°N firing east", ShotParameters(distance=800, latitude=45, azimuth=90)),
    ]
    for label, case in cases:
        sol = solve(rifle, ammo, case, AtmosphericConditions(), config)
        print(f"  {label:<18} elev {sol.elevation_correction.mil:>6.2f} MIL  "
              f"drift {sol.windage:>6.2f} in")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"  Total runtime: {elapsed:.1f} seconds\n")


if __name__ == "__main__":
    main()
