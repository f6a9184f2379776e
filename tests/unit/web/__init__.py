"""Unit tests for avatar API route modules.

Structure:
    tests/unit/web/
    ├── test_app.py              # App factory, middleware, error mapping
    ├── test_routes_settings.py  # Save/load settings
    ├── test_routes_items.py     # Catalog listing
    ├── test_routes_slots.py     # Slot resolution and rules
    └── test_routes_health.py    # Health checks

Testing pattern:
    - Build the full app with create_app() over a temp store
    - Use FastAPI's TestClient inside a `with` block so startup runs
"""
