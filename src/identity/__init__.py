"""
Identity, session and application entitlement bounded context.
"""
