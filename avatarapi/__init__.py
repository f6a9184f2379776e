"""Avatar reward API: teacher catalogs and badge-unlocked avatar slots."""

__version__ = "1.0.0"
