"""
tokenmsg CLI Commands Package

Command modules for the tokenmsg CLI.
"""

__all__ = ['instantiate', 'config']
