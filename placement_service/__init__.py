"""
X_Three_PL placement service
Tracks which product sits in which warehouse cell, in what quantity and condition
"""

__version__ = '1.0.0'
