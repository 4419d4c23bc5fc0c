"""Infrastructure layer — project discovery, content files, templates.

This layer depends on stdlib and third-party libs (Jinja2, ruamel.yaml).
Content records are read and written only through this layer.
It must never import from services, commands, or output.
"""
