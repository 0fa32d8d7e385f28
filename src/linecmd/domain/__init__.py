"""Domain layer — values, schemas, scanning, binding, and commands.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, output, or config.
"""
