"""
Domain layer - marker recognition, constructor discovery and violation triage.

This layer contains:
- Domain models (syntax abstraction, reports, marker definitions)
- Domain services (detector, locator, scanner, project root finder)
- Domain exceptions

IMPORTANT: This layer must NOT depend on infrastructure or application layers.
It never parses text; it only reads the syntax models handed to it.
"""
