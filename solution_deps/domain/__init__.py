"""
Domain Layer

Models and pure services of the dependency-graph engine.
"""
