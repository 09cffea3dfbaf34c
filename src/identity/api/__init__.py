"""Identity HTTP API"""
