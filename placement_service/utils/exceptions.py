"""
Domain exceptions

InventoryError subclasses are expected business outcomes and map to 400.
Everything else is treated as an internal failure.
"""


class InventoryError(Exception):
    """Base class for validation and business-rule failures"""
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class RequestValidationError(InventoryError):
    """One or more request fields failed validation"""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(f"Validation failed: {', '.join(self.errors)}")


class RecordNotFoundError(InventoryError):
    pass


class CellNotFoundError(InventoryError):
    """Cell barcode is unknown to the resolver"""

    def __init__(self, cell_barcode):
        self.cell_barcode = cell_barcode
        super().__init__(f"Warehouse with SHK '{cell_barcode}' not found in x_Storage_Scklads")


class InsufficientQuantityError(InventoryError):
    """No record with enough stock, or no matching record at all"""

    MESSAGE = 'Недостаточное количество или запись не найдена'

    def __init__(self, message=MESSAGE):
        super().__init__(message)


class MissingSearchParameterError(InventoryError):
    pass


class CellResolverError(Exception):
    """Cell lookup failed for a reason other than an unknown barcode"""
    pass
