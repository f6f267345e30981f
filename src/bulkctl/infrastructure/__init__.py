"""Infrastructure layer - input sources and bulk log files.

This layer depends on stdlib only.
It must never import from engine, services, plugins, or cli.
"""
