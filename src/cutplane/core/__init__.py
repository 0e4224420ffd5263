"""
Core Module - Shared Vocabulary

Provides:
- CutStatus, Options, CInfo
- Canonical JSON serialization for run reports
"""

from .canonical_json import canonical_dumps, canonical_hash
from .status import CutStatus, Options, CInfo

__all__ = [
    'canonical_dumps',
    'canonical_hash',
    'CutStatus',
    'Options',
    'CInfo',
]
