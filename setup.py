"""
Setup script for the dbhub client.
This is maintained for backward compatibility.
Modern installations should use pyproject.toml.
"""

from setuptools import setup

# All configuration is in pyproject.toml
setup()
