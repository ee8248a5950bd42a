"""HTTP layer: routers, authentication and error handlers."""
