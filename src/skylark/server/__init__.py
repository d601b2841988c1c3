"""Server edge — error pages, ASGI response emission, and the dev server."""
