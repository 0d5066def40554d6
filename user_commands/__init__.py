"""
Command modules loaded by the command manager. Each module exposes a `command` definition.
"""
