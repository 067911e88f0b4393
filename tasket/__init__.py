"""Real-time collaboration and notification service for Tasket.

Ensures the local ``tasket`` package takes precedence over similarly named
modules that might be installed in the environment.
"""
