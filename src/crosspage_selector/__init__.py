"""Browse a paged remote collection and build a selection that spans pages."""

__version__ = "0.1.0"
