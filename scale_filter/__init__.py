"""
Scale Filter - multiplies numeric reading values in a batch by a scale factor.
"""

__version__ = "1.0.0"
