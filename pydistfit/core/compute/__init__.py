"""Compute helpers shared by all domains."""

from pydistfit.core.compute.timing import Timer

__all__ = ["Timer"]
