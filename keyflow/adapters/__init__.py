"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports: the HTTP action
    executor talking to the on-device automation agent, an in-memory
    recording executor, and local settings storage.

Dependencies:
    ``requests`` for the agent transport, filesystem APIs for settings.

Call context:
    Imported by ``keyflow.app.controller`` for runtime wiring and by tests.
"""
