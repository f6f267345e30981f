"""Service layer - wiring settings, sinks, and the dispatcher into a run.

Services may import from every lower layer.
They must never import from cli.
"""
