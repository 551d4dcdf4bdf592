"""Settings package for the house rental project.

The `base.py` module contains configuration shared across environments.
The `dev.py`, `prod.py` and `test.py` modules extend the base settings
with environment specific overrides.
"""
