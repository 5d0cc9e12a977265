"""Failure types raised by the fitting engine."""

from __future__ import annotations


class FitError(ValueError):
    """Base class for a fit request that cannot produce a result."""


class DegenerateInputError(FitError):
    """Too few points (or a malformed array) to estimate a plane."""


class SingularSystemError(FitError):
    """The quadratic normal equations are numerically singular."""
