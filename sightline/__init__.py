"""Field-of-view and line-of-sight evaluation over grid maps."""

__version__ = "0.1.0"
