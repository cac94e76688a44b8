"""rehab-builder: assemble ordered rehabilitation exercise programs."""

__version__ = "0.1.0"
