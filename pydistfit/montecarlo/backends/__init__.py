"""Bootstrap backends."""

from pydistfit.montecarlo.backends.cpu import CPUBootstrapBackend

__all__ = ["CPUBootstrapBackend"]
