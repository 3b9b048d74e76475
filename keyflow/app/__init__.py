"""Application composition layer for the Tkinter GUI.

Holds the automation service handle, the process-wide provider the UI binds
to, the lifecycle host that wires them, and the window itself.
"""
