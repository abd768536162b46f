"""
Explosio - Error kinds
======================

Typed errors raised or returned by the analysis engine.

Validators never raise for a malformed tree: they return the error (or
None) so that the caller decides what to do with it. Resource-level
findings are collected in a ValidationErrors aggregate; structural
findings (cycles, inconsistent durations) are returned one at a time.
"""

from __future__ import annotations

from typing import Iterator, List, Optional


class ExplosioError(Exception):
    """Base class for every engine error."""


class InvalidPeriodError(ExplosioError):
    """A period is not one of the known PeriodType values."""


class NegativeQuantityError(ExplosioError):
    """A quantity (resource or supplier capacity) is negative."""


class NegativeCostError(ExplosioError):
    """A cost field is negative."""


class InvalidActivityError(ExplosioError):
    """Null root, negative or inconsistent durations, repeated IDs."""


class InvalidSupplierError(ExplosioError):
    """A supplier is malformed or cannot be resolved."""


class ValidationErrors(ExplosioError):
    """
    Aggregate of validation findings.

    Holds every error found during a scan instead of stopping at the
    first one. The message is the single error when there is only one,
    otherwise a count followed by the first error.
    """

    def __init__(self, errors: Optional[List[Exception]] = None):
        self.errors: List[Exception] = []
        for err in errors or []:
            self.add(err)
        super().__init__()

    def add(self, err: Optional[Exception]) -> None:
        if err is not None:
            self.errors.append(err)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[Exception]:
        return iter(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return "no validation errors"
        if len(self.errors) == 1:
            return str(self.errors[0])
        return f"{len(self.errors)} validation errors: {self.errors[0]}"

    def of_type(self, kind: type) -> List[Exception]:
        """Findings of the given error kind."""
        return [e for e in self.errors if isinstance(e, kind)]
