"""
Identity Domain Layer
Entities, value objects, repository protocols and pure policy services
"""
