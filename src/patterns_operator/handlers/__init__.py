"""Handler modules for CRD resources.

``handlers.pattern`` registers itself via @kopf decorators; it is imported by
``main`` rather than here because the pipeline steps build on ``handlers.base``.
"""
