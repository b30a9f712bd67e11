"""Deterministic evaluation of SPN instances.

Reference-vector checks, roundtrip verification, avalanche metrics and
S-box differential/linear analysis.

Research / education only. Do NOT use in production.
"""

from .roundtrip import RoundtripResult, RoundtripFailure, run_roundtrip_tests
from .sbox_analysis import SBoxAnalysisResult, analyze_sbox, analyze_all_sboxes, analyze_table
from .vectors import REFERENCE_BLOCK_VECTOR, REFERENCE_CTR_VECTOR, VectorCheck, check_vectors, reference_spec
from .report import EvaluationReport

__all__ = [
    "RoundtripResult",
    "RoundtripFailure",
    "run_roundtrip_tests",
    "SBoxAnalysisResult",
    "analyze_sbox",
    "analyze_all_sboxes",
    "analyze_table",
    "REFERENCE_BLOCK_VECTOR",
    "REFERENCE_CTR_VECTOR",
    "VectorCheck",
    "check_vectors",
    "reference_spec",
    "EvaluationReport",
]
