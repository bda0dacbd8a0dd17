"""Models that live inside each tenant's own database."""

from sqlalchemy import Column, Integer, Numeric, String

from tenant_accounts.database import TenantBase
from tenant_accounts.models.mixins import TimestampMixin


class Transaction(TenantBase, TimestampMixin):
    """One entry in a tenant's financial ledger."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Numeric(12, 2), nullable=False)  # negative for expenses
    description = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
