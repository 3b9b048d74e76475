"""Use-case layer for logic-key workflows.

Each module coordinates domain objects and ports without performing I/O
directly; the action executor port does the physical work.
"""
