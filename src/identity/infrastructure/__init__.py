"""
Identity Infrastructure Layer
ORM models, repositories, external adapters
"""
