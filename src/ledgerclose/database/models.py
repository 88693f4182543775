"""SQLAlchemy models for the ledgerclose database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Entity(Base):
    """Accounting entity whose books were loaded."""

    __tablename__ = "entities"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    income_summary_account_name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    capital_entities = relationship(
        "CapitalEntityRecord",
        back_populates="entity",
        cascade="all, delete-orphan",
        order_by="CapitalEntityRecord.position",
    )
    fiscal_years = relationship(
        "FiscalYearRecord",
        back_populates="entity",
        cascade="all, delete-orphan",
        order_by="FiscalYearRecord.year",
    )
    account_groups = relationship(
        "AccountGroupRecord", back_populates="entity", cascade="all, delete-orphan"
    )
    accounts = relationship("AccountRecord", back_populates="entity", cascade="all, delete-orphan")


class CapitalEntityRecord(Base):
    """Owner of an entity and its ownership share."""

    __tablename__ = "capital_entities"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    capital_account_name = Column(String, nullable=False)
    distribution_account_name = Column(String, nullable=True)
    ownership = Column(Numeric(4, 3), nullable=False)

    __table_args__ = (UniqueConstraint("entity_id", "name", name="uq_entity_capital_entity"),)

    # Relationships
    entity = relationship("Entity", back_populates="capital_entities")


class FiscalYearRecord(Base):
    """Fiscal year of an entity."""

    __tablename__ = "fiscal_years"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    year = Column(Integer, nullable=False)
    start = Column(DateTime, nullable=False)
    end = Column(DateTime, nullable=False)

    __table_args__ = (UniqueConstraint("entity_id", "year", name="uq_entity_year"),)

    # Relationships
    entity = relationship("Entity", back_populates="fiscal_years")
    accounts = relationship(
        "FiscalYearAccountRecord", back_populates="fiscal_year", cascade="all, delete-orphan"
    )
    transactions = relationship(
        "TransactionRecord", back_populates="fiscal_year", cascade="all, delete-orphan"
    )


class AccountGroupRecord(Base):
    """Named account group."""

    __tablename__ = "account_groups"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    name = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("entity_id", "name", name="uq_entity_group_name"),)

    # Relationships
    entity = relationship("Entity", back_populates="account_groups")


class AccountRecord(Base):
    """Ledger account."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    debit_default = Column(Boolean, nullable=False)
    receivable = Column(Boolean, default=False, nullable=False)
    group_name = Column(String, nullable=True)

    __table_args__ = (UniqueConstraint("entity_id", "name", name="uq_entity_account_name"),)

    # Relationships
    entity = relationship("Entity", back_populates="accounts")


class FiscalYearAccountRecord(Base):
    """Link activating an account in a fiscal year with its group and order."""

    __tablename__ = "fiscal_year_accounts"

    id = Column(Integer, primary_key=True)
    fiscal_year_id = Column(Integer, ForeignKey("fiscal_years.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    group_id = Column(Integer, ForeignKey("account_groups.id"), nullable=False)
    account_type = Column(String, nullable=False)
    group_order = Column(Integer, nullable=False)
    account_order = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("fiscal_year_id", "account_id", name="uq_fiscal_year_account"),
    )

    # Relationships
    fiscal_year = relationship("FiscalYearRecord", back_populates="accounts")
    account = relationship("AccountRecord")
    group = relationship("AccountGroupRecord")


class TransactionRecord(Base):
    """Stored transaction; its id is the new id assigned at storage time."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    fiscal_year_id = Column(Integer, ForeignKey("fiscal_years.id"), nullable=False)
    description = Column(String, nullable=True)
    date = Column(DateTime, nullable=False)
    checked = Column(Boolean, default=False, nullable=False)
    balance = Column(Boolean, default=False, nullable=False)

    # Relationships
    fiscal_year = relationship("FiscalYearRecord", back_populates="transactions")
    items = relationship(
        "ItemRecord",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="ItemRecord.sequence",
    )
    old_id = relationship(
        "IdMapRecord", back_populates="transaction", uselist=False, cascade="all, delete-orphan"
    )


class ItemRecord(Base):
    """Debit or credit of a stored transaction."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    sequence = Column(Integer, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    debit = Column(Boolean, nullable=False)
    checked = Column(Boolean, default=False, nullable=False)

    __table_args__ = (UniqueConstraint("transaction_id", "sequence", name="uq_item_sequence"),)

    # Relationships
    transaction = relationship("TransactionRecord", back_populates="items")
    account = relationship("AccountRecord")


class ReimbursementRecord(Base):
    """Settlement of a receivable item by a reimbursing item."""

    __tablename__ = "reimbursements"

    id = Column(Integer, primary_key=True)
    receivable_item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    reimbursing_item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    reimbursed_amount = Column(Numeric(12, 2), nullable=False)
    allocated_amount = Column(Numeric(12, 2), nullable=False)

    # Relationships
    receivable_item = relationship("ItemRecord", foreign_keys=[receivable_item_id])
    reimbursing_item = relationship("ItemRecord", foreign_keys=[reimbursing_item_id])


class IdMapRecord(Base):
    """Map from a ledger transaction id (per entity and year) to its stored id."""

    __tablename__ = "transaction_id_map"

    id = Column(Integer, primary_key=True)
    entity_id = Column(Integer, ForeignKey("entities.id"), nullable=False)
    year = Column(Integer, nullable=False)
    old_id = Column(Integer, nullable=False)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)

    __table_args__ = (UniqueConstraint("entity_id", "year", "old_id", name="uq_old_id"),)

    # Relationships
    transaction = relationship("TransactionRecord", back_populates="old_id")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
