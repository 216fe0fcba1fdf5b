"""depsweep data models."""

from depsweep.models.scan_result import ErrorRecord, MatchRecord, ScanOptions, ScanResult

__all__ = [
    "ErrorRecord",
    "MatchRecord",
    "ScanOptions",
    "ScanResult",
]
