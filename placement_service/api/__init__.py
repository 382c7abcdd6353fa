"""
HTTP layer: application factory, controllers and middlewares
"""
