from .scan_service import ScanInputError, run_scan, validate_input

__all__ = ["ScanInputError", "run_scan", "validate_input"]
