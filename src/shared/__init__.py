"""
Shared Layer - Cross-Cutting Concerns
Configuration, error contract, domain base classes, persistence and observability
"""
