"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: the REST weather provider,
    its offline mock, in-process device signal sources, and JSON settings
    storage.

Dependencies:
    ``requests`` (REST provider), filesystem APIs, and domain protocols.

Call context:
    Imported by ``weatherlike.app`` for runtime wiring and by tests for
    transport-level behavior checks.
"""
