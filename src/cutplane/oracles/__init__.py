"""
Oracles Module - Separation Oracles

Provides:
- LDLTMgr: lazy LDLT factorization with infeasibility witness
- LMIOracle / LMI0Oracle: linear matrix inequality feasibility
- QMIOracle: quadratic matrix inequality feasibility
- ProfitOracle / ProfitOracleRb / ProfitOracleQ: profit maximization
"""

from .ldlt_mgr import LDLTMgr
from .lmi_oracle import LMIOracle, LMI0Oracle
from .qmi_oracle import QMIOracle
from .profit_oracle import ProfitOracle, ProfitOracleRb, ProfitOracleQ

__all__ = [
    'LDLTMgr',
    'LMIOracle',
    'LMI0Oracle',
    'QMIOracle',
    'ProfitOracle',
    'ProfitOracleRb',
    'ProfitOracleQ',
]
