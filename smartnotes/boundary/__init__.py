"""
Boundary layer.

Adapters to external systems: relational database, vector storage and
embedding providers.
"""
