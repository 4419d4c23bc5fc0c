"""Domain layer — schemas, multilingual values, frontmatter, slugs, SEO rules.

This layer depends on stdlib, pydantic and ruamel.yaml, plus the pure text
helpers in :mod:`blogforge.infrastructure.jstext`. Config models are read,
never loaded here. It must never import from services, commands, or output.
"""
