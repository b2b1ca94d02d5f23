"""Domain layer — pure rules for ids and position ordering.

This layer has no I/O. It must never import from infrastructure,
services, client, commands, or output.
"""
