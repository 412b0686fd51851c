"""
Column types shared by the hris models
"""
from sqlalchemy import BigInteger, Integer

# SQLite only aliases the rowid (and so autoincrements) for INTEGER primary keys
BigIntegerPK = BigInteger().with_variant(Integer(), "sqlite")
