"""gamerig data models."""

from gamerig.models.check_result import CheckResult, ProbeReport, Status
from gamerig.models.cleanup import CleanupContext, CleanupTarget, ClearMode, InstallRoot, StepResult
from gamerig.models.component import Component
from gamerig.models.probe import Probe
from gamerig.models.step import CleanupStep, DirectoryTargetsStep

__all__ = [
    "CheckResult",
    "CleanupContext",
    "CleanupStep",
    "CleanupTarget",
    "ClearMode",
    "Component",
    "DirectoryTargetsStep",
    "InstallRoot",
    "Probe",
    "ProbeReport",
    "StepResult",
    "Status",
]
