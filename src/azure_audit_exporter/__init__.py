"""Azure audit exporter: republishes Azure audit facts as Prometheus metrics."""

from .constants import VERSION

__version__ = VERSION

__all__ = ["__version__"]
