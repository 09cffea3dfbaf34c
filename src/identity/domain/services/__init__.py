"""
Pure domain policies: token lifetimes and claims, authorization guards,
entitlement rules.
"""
