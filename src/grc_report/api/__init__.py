"""HTTP surface: FastAPI app, routes and error handlers."""
