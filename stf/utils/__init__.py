"""
Shared utilities for the Simple Test Framework.
"""
