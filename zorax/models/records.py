from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declared_attr

from zorax.db.session import Base


class TransactionRecordMixin:
    """Columns shared by the expenses and gains tables."""

    id           = Column(Integer, primary_key=True, index=True)
    sl_no        = Column(String(10), unique=True, nullable=False, index=True)
    date         = Column(String(10), nullable=False, index=True)
    time         = Column(String(10), nullable=False)
    name         = Column(Text, nullable=False)
    type         = Column(Text, nullable=False)
    detail       = Column(Text, nullable=False)
    payment_type = Column(Text, nullable=False)
    amount       = Column(Float, nullable=False)

    @declared_attr
    def created_by(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=False)


class Expense(TransactionRecordMixin, Base):
    __tablename__ = "expenses"


class Gain(TransactionRecordMixin, Base):
    __tablename__ = "gains"
