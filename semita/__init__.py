"""
Semita - neighborhood services hub backend.
"""

__version__ = "0.1.0"
