"""uilens - UI hierarchy analysis and fuzzy element matching for device automation."""

__version__ = "0.1.0"
