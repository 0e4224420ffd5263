"""
cutplane Command-Line Interface

Runs the bundled example problems with the cutting-plane loops.
"""

import sys
import argparse
import logging
import time
import numpy as np
from typing import Dict, Tuple

from scipy.linalg import eigvalsh

from . import (
    Ell,
    EllStable,
    LMIOracle,
    Options,
    ProfitOracle,
    ProfitOracleQ,
    ProfitOracleRb,
    canonical_dumps,
    canonical_hash,
    cutting_plane_feas,
    cutting_plane_optim,
    cutting_plane_optim_q,
)

# unit_price, scale, limit
PROFIT_PARAMS = (20.0, 40.0, 30.5)
PROFIT_ELASTICITIES = np.array([0.1, 0.4])
PROFIT_PRICE_OUT = np.array([10.0, 35.0])
PROFIT_ELASTICITY_VAR = np.array([0.003, 0.007])
PROFIT_PARAM_VAR = 1.0

# Two LMI constraints in three variables
LMI_F1 = [
    np.array([[-7.0, -11.0], [-11.0, 3.0]]),
    np.array([[7.0, -18.0], [-18.0, 8.0]]),
    np.array([[-2.0, -8.0], [-8.0, 1.0]]),
]
LMI_B1 = np.array([[33.0, -9.0], [-9.0, 26.0]])
LMI_F2 = [
    np.array([[-21.0, -11.0, 0.0], [-11.0, 10.0, 8.0], [0.0, 8.0, 5.0]]),
    np.array([[0.0, 10.0, 16.0], [10.0, -10.0, -10.0], [16.0, -10.0, 3.0]]),
    np.array([[-5.0, 2.0, -17.0], [2.0, -6.0, 8.0], [-17.0, 8.0, 6.0]]),
]
LMI_B2 = np.array([[14.0, 9.0, 40.0], [9.0, 91.0, 10.0], [40.0, 10.0, 15.0]])


class _StackedLMIOracle:
    """All of several LMI constraints; the first violated one cuts."""

    def __init__(self, oracles):
        self.oracles = oracles

    def assess_feas(self, x):
        for omega in self.oracles:
            cut = omega.assess_feas(x)
            if cut is not None:
                return cut
        return None


def _make_space(stable: bool, val: float, xc: np.ndarray):
    return EllStable(val, xc) if stable else Ell(val, xc)


def run_profit(variant: str, stable: bool, options: Options) -> Dict:
    """Solve the profit problem with one oracle variant."""
    space = _make_space(stable, 100.0, np.zeros(2))
    if variant == "rb":
        omega = ProfitOracleRb(PROFIT_PARAMS, PROFIT_ELASTICITIES, PROFIT_PRICE_OUT,
                               PROFIT_ELASTICITY_VAR, PROFIT_PARAM_VAR)
        y_best, target, num_iters = cutting_plane_optim(omega, space, 0.0, options)
    elif variant == "q":
        omega = ProfitOracleQ(PROFIT_PARAMS, PROFIT_ELASTICITIES, PROFIT_PRICE_OUT)
        y_best, target, num_iters = cutting_plane_optim_q(omega, space, 0.0, options)
    else:
        omega = ProfitOracle(PROFIT_PARAMS, PROFIT_ELASTICITIES, PROFIT_PRICE_OUT)
        y_best, target, num_iters = cutting_plane_optim(omega, space, 0.0, options)

    return {
        'variant': variant,
        'stable': stable,
        'x_best': np.exp(y_best).tolist() if y_best is not None else None,
        'target': target,
        'num_iters': num_iters,
    }


def run_lmi(stable: bool, options: Options) -> Tuple[Dict, np.ndarray]:
    """Find a point satisfying both LMI constraints."""
    omega = _StackedLMIOracle([LMIOracle(LMI_F1, LMI_B1), LMIOracle(LMI_F2, LMI_B2)])
    space = _make_space(stable, 10.0, np.zeros(3))
    info = cutting_plane_feas(omega, space, options)
    x = space.xc()

    min_eigs = [
        float(eigvalsh(B - sum(xk * Fk for xk, Fk in zip(x, F))).min())
        for F, B in ((LMI_F1, LMI_B1), (LMI_F2, LMI_B2))
    ]
    report = info.to_canonical()
    report.update({'x': x.tolist(), 'min_eigenvalues': min_eigs})
    return report, x


def _options(args) -> Options:
    return Options(max_iter=args.max_iter, tol=args.tol)


def _write_output(path: str, data: Dict) -> None:
    # digest of the report without the digest field
    report = dict(data, sha256=canonical_hash(data))
    with open(path, 'w') as f:
        f.write(canonical_dumps(report, indent=2))
    print(f"\nResults saved to: {path}")


def cmd_profit(args):
    """Solve the profit maximization problem."""
    variant = "rb" if args.rb else ("q" if args.discrete else "nominal")
    print("=" * 60)
    print(f"Profit maximization ({variant}, {'stable' if args.stable else 'plain'} ellipsoid)")
    print("=" * 60)

    start = time.time()
    result = run_profit(variant, args.stable, _options(args))
    elapsed = time.time() - start

    print(f"Best profit: {result['target']:.6f}")
    print(f"Inputs: {result['x_best']}")
    print(f"Iterations: {result['num_iters']}")
    print(f"Time: {elapsed:.3f}s")

    if args.output:
        _write_output(args.output, result)
    return 0 if result['x_best'] is not None else 1


def cmd_lmi(args):
    """Solve the LMI feasibility demo."""
    print("=" * 60)
    print("LMI feasibility")
    print("=" * 60)

    report, x = run_lmi(args.stable, _options(args))
    print(f"Feasible: {report['feasible']}")
    print(f"Iterations: {report['num_iters']}")
    print(f"Point: {x}")
    print(f"Min eigenvalues: {report['min_eigenvalues']}")

    if args.output:
        _write_output(args.output, report)
    return 0 if report['feasible'] else 1


def cmd_bench(args):
    """Time every profit variant on both ellipsoids."""
    print("=" * 60)
    print("cutplane benchmark")
    print("=" * 60)

    options = _options(args)
    for variant in ("nominal", "rb", "q"):
        for stable in (False, True):
            start = time.time()
            for _ in range(args.repeat):
                result = run_profit(variant, stable, options)
            elapsed = (time.time() - start) / args.repeat
            name = f"{variant}{'-stable' if stable else ''}"
            print(f"{name:16} iters={result['num_iters']:5d}  "
                  f"profit={result['target']:12.6f}  {elapsed * 1e3:8.3f} ms")
    return 0


def cmd_version(args):
    """Print version information."""
    from . import __version__
    print(f"cutplane {__version__}")
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='cutplane',
        description='Cutting-plane methods for convex feasibility and optimization'
    )
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log solver progress')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--max-iter', type=int, default=2000,
                        help='Iteration budget (default: 2000)')
    common.add_argument('--tol', type=float, default=1e-8,
                        help='Tolerance (default: 1e-8)')
    common.add_argument('--stable', action='store_true',
                        help='Use the factored ellipsoid')

    profit_parser = subparsers.add_parser('profit', parents=[common],
                                          help='Profit maximization')
    group = profit_parser.add_mutually_exclusive_group()
    group.add_argument('--rb', action='store_true', help='Robust variant')
    group.add_argument('--discrete', action='store_true', help='Integer inputs')
    profit_parser.add_argument('--output', '-o', type=str, help='Output JSON file')
    profit_parser.set_defaults(func=cmd_profit)

    lmi_parser = subparsers.add_parser('lmi', parents=[common], help='LMI feasibility')
    lmi_parser.add_argument('--output', '-o', type=str, help='Output JSON file')
    lmi_parser.set_defaults(func=cmd_lmi)

    bench_parser = subparsers.add_parser('bench', parents=[common],
                                         help='Time the profit variants')
    bench_parser.add_argument('--repeat', '-r', type=int, default=10,
                              help='Runs per variant (default: 10)')
    bench_parser.set_defaults(func=cmd_bench)

    ver_parser = subparsers.add_parser('version', help='Print version')
    ver_parser.set_defaults(func=cmd_version)

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='[%(levelname)s] %(name)s: %(message)s')

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
