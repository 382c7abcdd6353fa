#!/usr/bin/env python3
"""
X_Three_PL Service
Flask-based microservice tracking product placement in warehouse cells.
"""

from placement_service.api.main import main


if __name__ == '__main__':
    main()
