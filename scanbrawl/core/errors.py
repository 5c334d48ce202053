"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class ScanBrawlError(Exception):
    pass

class DataLoadError(ScanBrawlError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class CharacterValidationError(ScanBrawlError):
    def __init__(self, field: str, detail: str):
        super().__init__(f"Invalid character field '{field}': {detail}")
        self.field = field
        self.detail = detail

class ServiceError(ScanBrawlError):
    def __init__(self, status: int, detail: str):
        super().__init__(f"Character service error {status}: {detail}")
        self.status = status
        self.detail = detail
