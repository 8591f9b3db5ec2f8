"""
Проверка подписки и выдача файлов
"""
from .membership import MembershipOracle
from .gate import AccessGate, GateOutcome, GateResult

__all__ = ["MembershipOracle", "AccessGate", "GateOutcome", "GateResult"]
