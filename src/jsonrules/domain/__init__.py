"""Domain layer — values, outcomes, rules, combinators, and the registry.

This layer depends only on stdlib and pydantic.
It must never import from services, plugins, commands, output, or config.
"""
