"""
Identity Infrastructure - Persistence (SQLAlchemy)
"""
