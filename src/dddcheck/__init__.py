"""
dddcheck - static conformance checker for Domain-Driven-Design objects in Go.

Marked domain objects (value objects, entities, aggregates, aggregate roots,
commands) must never be constructed in zero-value form outside their own
constructor functions. This package finds the places where they are.
"""

__version__ = "1.0.0"
