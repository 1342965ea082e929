"""SQLAlchemy models for invoicekit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

SETTINGS_ROW_ID = "default"


class Invoice(Base):
    """Invoice model.

    The financial block, billing details and legacy address are stored as
    flat column groups; the ``has_*`` flags record whether each group was
    present on the source record.
    """

    __tablename__ = "invoices"

    id = Column(String, primary_key=True)
    invoice_number = Column(String, unique=True, nullable=False)
    client_name = Column(String, nullable=True)
    status = Column(String, nullable=False)
    issue_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    paid_date = Column(Date, nullable=True)

    has_financial = Column(Boolean, default=False, nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=True)
    discount = Column(Numeric(12, 2), nullable=True)
    tax = Column(Numeric(12, 2), nullable=True)
    total = Column(Numeric(12, 2), nullable=True)
    paid = Column(Numeric(12, 2), nullable=True)
    balance = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=True)

    has_billing_details = Column(Boolean, default=False, nullable=False)
    billing_company_name = Column(String, nullable=True)
    billing_contact_name = Column(String, nullable=True)
    billing_kvk_number = Column(String, nullable=True)
    billing_btw_number = Column(String, nullable=True)
    billing_email = Column(String, nullable=True)
    billing_street = Column(String, nullable=True)
    billing_postal_code = Column(String, nullable=True)
    billing_city = Column(String, nullable=True)
    billing_country = Column(String, nullable=True)

    has_billing_address = Column(Boolean, default=False, nullable=False)
    address_street = Column(String, nullable=True)
    address_postal_code = Column(String, nullable=True)
    address_city = Column(String, nullable=True)
    address_state = Column(String, nullable=True)
    address_country = Column(String, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )


class InvoiceItem(Base):
    """Invoice line item model."""

    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(String, ForeignKey("invoices.id"), nullable=False)
    position = Column(Integer, nullable=False)
    description = Column(String, nullable=False, default="")
    quantity = Column(Numeric(12, 3), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    tax = Column(Numeric(12, 2), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")


class CompanySettings(Base):
    """Company settings singleton model."""

    __tablename__ = "company_settings"

    id = Column(String, primary_key=True, default=SETTINGS_ROW_ID)
    name = Column(String, nullable=False)
    legal_name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")
    website = Column(String, nullable=False, default="")
    kvk_number = Column(String, nullable=False, default="")
    btw_number = Column(String, nullable=False, default="")
    street = Column(String, nullable=False, default="")
    postal_code = Column(String, nullable=False, default="")
    city = Column(String, nullable=False, default="")
    country = Column(String, nullable=False, default="")
    bank_name = Column(String, nullable=False, default="")
    iban = Column(String, nullable=False, default="")
    bic = Column(String, nullable=False, default="")
    default_payment_terms_days = Column(Integer, nullable=False, default=30)
    default_tax_rate = Column(Numeric(5, 2), nullable=False, default=21)
    invoice_prefix = Column(String, nullable=False, default="INV")
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
