"""Extensible gate registry using the Singleton pattern."""

from __future__ import annotations

import logging

from .gates import Operator, OneQubitOp, TwoQubitOp

logger = logging.getLogger(__name__)


class GateRegistry:
    """Singleton registry mapping gate names to Operator objects."""

    _instance: GateRegistry | None = None

    def __init__(self):
        self._gates: dict[str, Operator] = {}

    @classmethod
    def instance(cls) -> GateRegistry:
        if cls._instance is None:
            cls._instance = cls()
            cls._instance._register_builtins()
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset the singleton (for testing)."""
        cls._instance = None

    def _register_builtins(self):
        for op in OneQubitOp:
            self.register(Operator.one_qubit(op))
        for op in TwoQubitOp:
            self.register(Operator.two_qubits(op))

    def register(self, gate: Operator):
        if gate.name in self._gates:
            logger.debug("Replacing registered gate '%s'", gate.name)
        self._gates[gate.name] = gate

    def get(self, name: str) -> Operator:
        if name not in self._gates:
            raise KeyError(f"Gate '{name}' not found in registry")
        return self._gates[name]

    def __contains__(self, name: str) -> bool:
        return name in self._gates

    def single_qubit_gates(self) -> list[Operator]:
        return [g for g in self._gates.values() if g.num_qubits == 1]

    def two_qubit_gates(self) -> list[Operator]:
        return [g for g in self._gates.values() if g.num_qubits == 2]

    def gate_names(self) -> list[str]:
        return list(self._gates.keys())
