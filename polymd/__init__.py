"""polymd -- scaffold web component projects from a template."""

__version__ = "0.3.0"
