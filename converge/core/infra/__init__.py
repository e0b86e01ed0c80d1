"""
Contratos y base para providers de convergencia.

Los providers (file, env, remote_file) implementan estos contratos;
el core no depende de ningún provider concreto.
"""

from converge.core.infra.contracts import ConvergenceProvider, PlanResult
from converge.core.infra.base import BaseProvider
from converge.core.infra.requirements import Requirements

__all__ = ["ConvergenceProvider", "PlanResult", "BaseProvider", "Requirements"]
