"""
Shared infrastructure - database handle used across layers
"""
