"""depsweep — find and remove dependency-cache directories."""

__version__ = "0.1.0"
