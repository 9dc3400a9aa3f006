"""
utils/ - Shared Helpers
=======================
Logging setup and the error taxonomy used across all layers.
"""
