"""Configuration layer — project config, CLI settings, logging setup.

Project configuration (``blogforge.config.*``) is loaded per invocation and
frozen. This layer depends on stdlib, pydantic, ruamel.yaml and structlog.
It must never import from domain, services, commands, or output.
"""
