# Rev 0.1.0
"""todowbs – project / WBS / daily todo core."""

__version__ = "0.1.0"
