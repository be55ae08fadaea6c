"""
UI module for histview.
"""
