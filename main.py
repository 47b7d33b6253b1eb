"""Density-matrix simulator - command-line entry point.

Usage:
    python main.py --qubits 2 --gate H:0 --gate CX:0,1
    python main.py --qubits 3 --init plus --gate SWAP:0,2 --precision 3
"""

from __future__ import annotations

import argparse
import logging
import sys

from dm_sim.core.config import SimConfig
from dm_sim.engine.density_matrix import DensityMatrix, InitialState
from dm_sim.engine.errors import SimulationError
from dm_sim.engine.gate_registry import GateRegistry

logger = logging.getLogger(__name__)

INITIAL_STATES = {
    "zero": InitialState.ZERO,
    "plus": InitialState.PLUS,
    "none": None,
}


def parse_gate(text: str) -> tuple[str, list[int]]:
    """Parses 'NAME:q0,q1,...' into (name, [q0, q1, ...])."""
    name, sep, targets = text.partition(":")
    if not sep or not targets:
        raise argparse.ArgumentTypeError(
            f"Gate must look like NAME:q0[,q1...], got '{text}'")
    try:
        qubits = [int(q) for q in targets.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Qubit indices must be integers, got '{targets}'") from None
    return name, qubits


def build_parser() -> argparse.ArgumentParser:
    registry = GateRegistry.instance()
    parser = argparse.ArgumentParser(
        description="Evolve an n-qubit density matrix under a sequence of gates.")
    parser.add_argument("--qubits", type=int, required=True)
    parser.add_argument("--init", choices=sorted(INITIAL_STATES), default="zero")
    parser.add_argument("--gate", dest="gates", type=parse_gate, action="append",
                        default=[],
                        help=f"NAME:q0[,q1]; known gates: {', '.join(registry.gate_names())}")
    parser.add_argument("--precision", type=int, default=None)
    parser.add_argument("--config-dir", default=None)
    return parser


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = SimConfig.load(args.config_dir)
    logging.basicConfig(level=config.log_level,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.qubits < 0 or args.qubits > config.max_qubits:
        print(f"--qubits must be in [0, {config.max_qubits}]", file=sys.stderr)
        return 1

    rho = DensityMatrix.new(args.qubits, INITIAL_STATES[args.init])
    try:
        for name, qubits in args.gates:
            if len(qubits) == 1:
                rho.evolve_single(name, qubits[0])
            else:
                rho.evolve(name, qubits)
    except (KeyError, SimulationError) as exc:
        logger.error("Evolution failed: %s", exc)
        return 1

    print(rho.format(args.precision if args.precision is not None else config.precision))
    try:
        tr = rho.trace(config.trace_tolerance)
    except SimulationError as exc:
        print(f"trace check failed: {exc}", file=sys.stderr)
        return 1
    print(f"trace = {tr.real:.{config.precision}f}")
    return 0


def main():
    sys.exit(run())


if __name__ == '__main__':
    main()
