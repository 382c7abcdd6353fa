import requests
from typing import Optional
from flask import current_app
import logging

from placement_service.clients.cell_resolver import CellResolver
from placement_service.utils.exceptions import CellResolverError

logger = logging.getLogger(__name__)


class CellServiceClient(CellResolver):
    """Client for the warehouse cell directory service"""

    def __init__(self, base_url: str = None, timeout: float = None):
        self._base_url = base_url
        self._timeout = timeout

    @property
    def base_url(self):
        """Get base URL, using Flask config if not provided during init"""
        if self._base_url is None:
            try:
                self._base_url = current_app.config.get('CELL_SERVICE_URL', 'http://localhost:3020')
            except RuntimeError:
                # Working outside application context, use default
                self._base_url = 'http://localhost:3020'
        return self._base_url.rstrip('/')

    @property
    def timeout(self):
        if self._timeout is None:
            try:
                self._timeout = current_app.config.get('CELL_SERVICE_TIMEOUT', 5)
            except RuntimeError:
                self._timeout = 5
        return self._timeout

    def resolve(self, cell_barcode: str) -> Optional[str]:
        """Get the display name of a cell, None when the service does not know it"""
        url = f"{self.base_url}/cells/{cell_barcode}"
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout calling cell service for {cell_barcode}")
            raise CellResolverError(f"Cell service timed out for {cell_barcode}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Connection error calling cell service for {cell_barcode}: {e}")
            raise CellResolverError(f"Cell service unavailable: {e}") from e

        if response.status_code == 404:
            logger.warning(f"Cell {cell_barcode} not found in cell service")
            return None
        if response.status_code != 200:
            logger.error(f"Cell service error for {cell_barcode}: {response.status_code}")
            raise CellResolverError(f"Cell service returned {response.status_code}")

        name = response.json().get('name')
        return name or None
