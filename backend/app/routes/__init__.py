# Routes package init
"""
WoofPoint Backend — API Routes Package
========================================

Route Inventory:
    - auth.py:     POST /api/auth/{signup,login,logout,upload-photo}
    - owner.py:    GET|PUT /api/owner/profile
                   POST /api/owner/dogs, PUT|DELETE /api/owner/dogs/{dogId}
                   GET /api/owner/trainers, GET /api/owner/trainers/{trainerId}
    - trainer.py:  GET|PUT /api/trainer/profile
    - health.py:   GET /health

Routes stay thin: extract the body, path, identity, and session, call one
service method, wrap the result. Errors propagate to the handlers in main.py.
"""
