"""
Application Layer

Use-case orchestration over the domain services.
"""
