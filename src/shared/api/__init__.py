"""
Shared API utilities
"""
