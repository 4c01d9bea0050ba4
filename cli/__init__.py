"""
tokenmsg Command Line Interface
"""

from tokenmsg import __version__

__all__ = ['__version__']
