from sqlalchemy import Column, Integer, String, Text, Numeric, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()

CATEGORY_TYPES = ("income", "expense")


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50))
    email = Column(Text, unique=True, nullable=False, index=True)
    joined = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    categories = relationship("Category", back_populates="owner", passive_deletes=True)
    transactions = relationship("Transaction", back_populates="owner", passive_deletes=True)


class Login(TimestampMixin, Base):
    """Credential row; looked up by email during authentication only."""
    __tablename__ = "login"

    id = Column(Integer, primary_key=True, index=True)
    hash = Column(String(100), nullable=False)
    email = Column(Text, unique=True, nullable=False, index=True)


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    type = Column(String(10), nullable=False, default="expense")  # 'income' or 'expense'
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True)

    owner = relationship("User", back_populates="categories")
    transactions = relationship("Transaction", back_populates="category", passive_deletes=True)


class Transaction(TimestampMixin, Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    venue = Column(String(50), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    comments = Column(Text)
    date = Column(Date, nullable=False, server_default=func.current_date())
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True)

    owner = relationship("User", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")
