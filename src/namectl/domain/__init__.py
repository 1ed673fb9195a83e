"""Domain layer: name rules, collision table, value allocation.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
