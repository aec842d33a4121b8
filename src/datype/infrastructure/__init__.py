"""Infrastructure layer: reading and writing documents on disk.

This layer depends on stdlib and third-party parsers (ruamel.yaml).
It must never import from services, commands, or output.
"""
