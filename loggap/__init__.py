"""loggap - statistical gap detection for timestamped logs"""

__version__ = "0.1.0"
