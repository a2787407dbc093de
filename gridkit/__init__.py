"""gridkit — tabular data view engine for data-grid widgets."""

__version__ = "0.1.0"
