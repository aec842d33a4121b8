"""Domain layer: value classification, clone/equal/merge, and utilities.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
