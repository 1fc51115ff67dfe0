"""Domain layer for costbook: entities, errors and the costing services.

Services are imported from their own modules (``costbook.domain.recipe`` etc.)
so that ``costbook.database.base`` can import the entities without a cycle.
"""
