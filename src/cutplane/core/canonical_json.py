"""
Canonical JSON Serialization

Deterministic JSON output for run reports: sorted keys, numpy arrays
and scalars converted to plain Python values.
"""

import json
import hashlib
from typing import Any

import numpy as np


def _to_builtin(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    return str(obj)


def canonical_dumps(obj: Any, indent: int = None) -> str:
    """
    Canonical JSON serialization with sorted keys.

    Args:
        obj: Object to serialize
        indent: Indentation level (None for compact)

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(',', ':') if indent is None else None,
        indent=indent,
        default=_to_builtin
    )


def canonical_hash(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON of ``obj``."""
    return hashlib.sha256(canonical_dumps(obj).encode()).hexdigest()
