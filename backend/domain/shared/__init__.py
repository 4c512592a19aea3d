"""
Shared Kernel - exceptions and value objects used by every domain.
"""
