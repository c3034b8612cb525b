"""FastAPI routers mounted by :func:`algoplay.api.app.create_app`."""
