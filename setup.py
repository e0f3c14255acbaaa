"""
Setup script for tools that do not read pyproject.toml yet.
All packaging metadata lives in pyproject.toml (PEP 621).
"""

from setuptools import setup

setup()
