#!/usr/bin/env python3
"""
Phase-space volume check for the flat transfer function on theta.

Draws uniform points in [0, 1], runs the configured modules once per
point and compares the Monte Carlo estimate of the integral of
TF_times_jacobian (analytic value: pi) and of sin(theta) dtheta
(analytic value: 2).

Examples:
    python scripts/theta_volume_check.py --points 100000 --seed 42
    python scripts/theta_volume_check.py --config config/flat_theta.yaml --energy 10 --p 6 --phi 0.5
"""

import argparse
import logging
import math
import sys
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).resolve().parents[1]))

from mem.kinematics import FourVector
from mem.modules import Status, build_modules
from mem.parameters import load_config
from mem.pool import Pool

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "config" / "flat_theta.yaml"

logger = logging.getLogger("theta_volume_check")


def run_volume_check(config: dict, reco_particle: FourVector, n_points: int,
                     seed=None, output_module: str = None) -> dict:
    """
    Integrate the configured modules over [0, 1]^ndim with plain Monte Carlo.

    Returns a summary dict with the estimates, their errors and the number
    of points violating E / |p| / phi preservation. Points a module skips
    with Status.NEXT count as zero; after Status.ABORT the estimates only
    cover the points evaluated before it and "aborted" is set.
    """
    if n_points < 1:
        raise ValueError(f"Need at least one phase-space point (got {n_points})")

    rng = np.random.default_rng(seed)
    pool = Pool()
    pool.put("cuba", "ps_points", [])
    pool.put("input", "particles", [reco_particle])

    modules = build_modules(config, pool)
    if not modules:
        raise ValueError("Configuration defines no modules")
    ndim = sum(m.dimensions() for m in modules)
    output_module = output_module or modules[0].name
    logger.info(f"Built {len(modules)} module(s), integration dimension {ndim}")

    weights = np.zeros(n_points, dtype=float)
    sin_theta = np.zeros(n_points, dtype=float)
    violations = 0
    skipped = 0
    processed = 0
    aborted = False

    for i in range(n_points):
        pool.put("cuba", "ps_points", rng.random(ndim).tolist())

        status = Status.OK
        for module in modules:
            status = module.work()
            if status != Status.OK:
                break
        if status == Status.ABORT:
            logger.warning(f"Integration aborted at point {i + 1}/{n_points}")
            aborted = True
            break
        processed += 1
        if status == Status.NEXT:
            skipped += 1
            continue

        out = pool.get(output_module, "output")
        weights[i] = pool.get(output_module, "TF_times_jacobian")
        sin_theta[i] = weights[i] * math.sin(out.theta)

        if (abs(out.E - reco_particle.E) > 1e-9
                or abs(out.magnitude - reco_particle.magnitude) > 1e-9
                or (out.pt > 1e-12 and abs(out.phi - reco_particle.phi) > 1e-9)):
            violations += 1

    n = processed
    weights = weights[:n]
    sin_theta = sin_theta[:n]
    return {
        "points": n,
        "skipped": skipped,
        "aborted": aborted,
        "dimensions": ndim,
        "volume": float(weights.mean()) if n else 0.0,
        "volume_error": float(weights.std(ddof=1) / math.sqrt(n)) if n > 1 else 0.0,
        "solid_angle": float(sin_theta.mean()) if n else 0.0,
        "solid_angle_error": float(sin_theta.std(ddof=1) / math.sqrt(n)) if n > 1 else 0.0,
        "violations": violations,
    }


def build_parser():
    return argparse.ArgumentParser(
        description="Flat transfer function on theta: phase-space volume check",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  python scripts/theta_volume_check.py --points 100000 --seed 42
  python scripts/theta_volume_check.py --energy 10 --p 6 --theta 1.0 --phi 0.5"""
    )


def main(argv=None):
    parser = build_parser()
    parser.add_argument("--config", default=str(DEFAULT_CONFIG), help="Path to YAML module configuration")
    parser.add_argument("--points", type=int, default=10000, help="Number of phase-space points (default 10000)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    parser.add_argument("--energy", type=float, default=10.0, help="Input particle energy [GeV]")
    parser.add_argument("--p", type=float, default=6.0, help="Input particle |p| [GeV]")
    parser.add_argument("--theta", type=float, default=1.0, help="Input particle polar angle [rad]")
    parser.add_argument("--phi", type=float, default=0.5, help="Input particle azimuthal angle [rad]")
    parser.add_argument("--tolerance", type=float, default=5.0, help="Allowed deviation in standard errors")
    parser.add_argument("--verbose", action="store_true", help="Show debug output")
    args = parser.parse_args(argv)
    if args.points < 1:
        parser.error("--points must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    reco = FourVector.from_spherical(args.energy, args.p, args.theta, args.phi)
    config = load_config(args.config)

    print("\n" + "=" * 60)
    print("Flat transfer function on theta: volume check")
    print("=" * 60)
    print(f"Config           : {args.config}")
    print(f"Points           : {args.points}")
    print(f"Random Seed      : {args.seed if args.seed is not None else 'None'}")
    print(f"Input particle   : {reco}")
    print("=" * 60 + "\n")

    results = run_volume_check(config, reco, args.points, seed=args.seed)

    dev_volume = abs(results["volume"] - math.pi)
    dev_solid = abs(results["solid_angle"] - 2.0)
    ok_volume = dev_volume <= max(args.tolerance * results["volume_error"], 1e-12)
    ok_solid = dev_solid <= args.tolerance * results["solid_angle_error"]
    passed = ok_volume and ok_solid and results["violations"] == 0 and not results["aborted"]

    print("=" * 60)
    print(f"Dimensions        : {results['dimensions']}")
    print(f"Points used       : {results['points'] - results['skipped']}/{results['points']}")
    print(f"Aborted           : {results['aborted']}")
    print(f"Volume            : {results['volume']:.6f} +- {results['volume_error']:.6f} (pi = {math.pi:.6f})")
    print(f"Int sin(theta)    : {results['solid_angle']:.6f} +- {results['solid_angle_error']:.6f} (expected 2)")
    print(f"Invariant breaks  : {results['violations']}")
    print(f"Result            : {'PASS' if passed else 'FAIL'}")
    print("=" * 60 + "\n")

    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(main())
