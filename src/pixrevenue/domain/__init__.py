"""Domain layer for pixrevenue application.

Services are imported from their modules (e.g. ``pixrevenue.domain.revenue``)
so that the database layer can import entities without a circular import.
"""
