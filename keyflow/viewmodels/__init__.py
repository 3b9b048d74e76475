"""ViewModel package for UI state and command surfaces.

Call context:
    ``keyflow/app/main.py`` imports concrete viewmodels from this package to
    bind view callbacks to state transitions.

Dependencies:
    Domain types and the service provider interface only. Adapters and I/O
    stay outside.
"""
