# Services package init
"""
Birdhouse Backend - Services Layer
===================================

Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - BirdService: lookups, inserts and updates of Bird records
"""
