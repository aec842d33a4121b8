"""Service layer: document-level operations returning ServiceResult.

Services bridge the pure domain functions and the infrastructure layer.
They never print; the CLI renders their results.
"""
