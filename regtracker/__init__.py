"""
Registration Progress Tracker - 7-step guided registration with staff sign-off.

Subpackages:
- schemas: step catalog and student models
- workflow: step progression, device storage and staff mode
- viewer: certificate, step cards and roster tables
"""

__version__ = "0.1.0"
