from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import Mapped, mapped_column, DeclarativeBase

# 64-bit ids; SQLite only autoincrements an INTEGER PRIMARY KEY column
IdType = BigInteger().with_variant(Integer, "sqlite")

# Largest id the id column can hold
MAX_ID = 2**63 - 1


# -----------------------------------------------------------
# Base Configuration (SQLAlchemy 2.0 declarative mapping)
# -----------------------------------------------------------
class Base(DeclarativeBase):
    """Base class which provides the integer surrogate key
    assigned by the database on first insert."""
    __abstract__ = True

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
