"""
Infrastructure Layer - Database-backed implementations of domain ports.
"""
