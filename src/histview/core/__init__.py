"""Core infrastructure layer.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Console output outside the blessed UI (Rich)
"""
