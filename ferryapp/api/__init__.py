"""
HTTP layer: dependencies, error mapping, middleware and routes.
"""
