"""
Inventory Record Model
"""

from datetime import datetime

from sqlalchemy import and_, or_
from sqlalchemy.ext.hybrid import hybrid_property

from placement_service.shared.database import db


# Fields returned by the placed/unplaced listings and both searches
LISTING_FIELDS = ('shk', 'name', 'wr_shk', 'wr_name', 'kolvo', 'condition', 'reason')


class InventoryRecord(db.Model):
    """Quantity of one product held in one warehouse cell"""
    __tablename__ = 'x_three_pl'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    product_barcode = db.Column('shk', db.String(100), nullable=False, index=True)
    product_name = db.Column('name', db.String(255), nullable=False)
    cell_barcode = db.Column('wr_shk', db.String(100), nullable=True, index=True)
    cell_name = db.Column('wr_name', db.String(255), nullable=True)
    quantity = db.Column('kolvo', db.Integer, nullable=False, default=0)
    condition = db.Column(db.String(100), nullable=True)
    reason = db.Column(db.String(255), nullable=True)
    executor = db.Column('ispolnitel', db.String(255), nullable=True)
    created_at = db.Column('date', db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column('date_upd', db.DateTime, nullable=True)

    def __repr__(self):
        return f'<InventoryRecord {self.id} {self.product_barcode}@{self.cell_barcode}>'

    @hybrid_property
    def is_placed(self):
        """Positive quantity sitting in a known, named cell"""
        return bool(self.quantity and self.quantity > 0 and self.cell_barcode and self.cell_name)

    @is_placed.expression
    def is_placed(cls):
        return and_(
            cls.quantity > 0,
            cls.cell_barcode.isnot(None),
            cls.cell_barcode != '',
            cls.cell_name.isnot(None),
            cls.cell_name != '',
        )

    @hybrid_property
    def is_unplaced(self):
        """Zero quantity with no cell assigned yet"""
        return self.quantity == 0 and not self.cell_barcode and not self.cell_name

    @is_unplaced.expression
    def is_unplaced(cls):
        return and_(
            cls.quantity == 0,
            or_(cls.cell_barcode.is_(None), cls.cell_barcode == ''),
            or_(cls.cell_name.is_(None), cls.cell_name == ''),
        )

    def to_dict(self):
        """Convert to dictionary using the wire field names"""
        return {
            'id': self.id,
            'shk': self.product_barcode,
            'name': self.product_name,
            'wr_shk': self.cell_barcode,
            'wr_name': self.cell_name,
            'kolvo': self.quantity,
            'condition': self.condition,
            'reason': self.reason,
            'ispolnitel': self.executor,
            'date': self.created_at.isoformat() if self.created_at else None,
            'date_upd': self.updated_at.isoformat() if self.updated_at else None
        }

    def to_listing_dict(self):
        """Projection used by listings and searches"""
        data = self.to_dict()
        return {key: data[key] for key in LISTING_FIELDS}
