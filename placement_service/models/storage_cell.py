"""
Storage Cell reference model

Read-only view of the warehouse cell directory owned by another system.
"""

from placement_service.shared.database import db


class StorageCell(db.Model):
    """Warehouse cell barcode to display name mapping"""
    __tablename__ = 'x_Storage_Scklads'

    barcode = db.Column('SHK', db.String(100), primary_key=True)
    name = db.Column('Name', db.String(255), nullable=False)

    def __repr__(self):
        return f'<StorageCell {self.barcode}>'
