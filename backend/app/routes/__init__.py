# Routes package init
"""
Birdhouse Backend - API Routes Package
=======================================

Route Inventory:
    - birds.py:   GET /birds, POST /birds, GET|PATCH|PUT /birds/{id},
                  PATCH /birds/{id}/like
    - health.py:  GET /health

Routes stay thin: extract request data, call the service, set status codes
and headers. Business logic lives in app.services.
"""
