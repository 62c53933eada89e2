"""Top-level pytest configuration.

Keeps the repository root importable so tests can share ``tests.helpers``.
"""
