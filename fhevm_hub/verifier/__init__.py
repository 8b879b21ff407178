"""Verification of generated example projects.

Public API
----------
.. autoclass:: VerificationRunner
.. autoclass:: VerificationReport
.. autoclass:: VerificationRecord
.. autoclass:: CommandOutcome
"""

from .results import ARTIFACTS, CommandOutcome, VerificationRecord, VerificationReport
from .runner import VerificationRunner, check_project, discover_projects

__all__ = [
    "ARTIFACTS",
    "CommandOutcome",
    "VerificationRecord",
    "VerificationReport",
    "VerificationRunner",
    "check_project",
    "discover_projects",
]
