# Routes package init
"""
ReserBot Backend — API Routes Package
=======================================

Route Inventory:
    - reservas.py:    GET    /api/reservas        (list, ordered by fecha)
                      POST   /api/reservas        (validate and create)
                      DELETE /api/reservas/{id}   (delete by id)
    - connection.py:  GET    /api/test            (record store connectivity probe)
    - health.py:      GET    /health              (liveness for load balancers)
    - static.py:      GET    / and /<file>        (frontend files, registered last)

Routes are thin: they call ReservaService and build the response envelope.
Failures are raised, never caught here; main.py maps them to status codes.
"""
