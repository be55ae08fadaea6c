"""
histview - Searchable terminal list of shell history
"""

__version__ = "0.1.0"
