"""
Identity Application Layer
Use-case services orchestrating the domain through the directory unit of work
"""
