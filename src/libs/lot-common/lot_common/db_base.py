# src/libs/lot-common/lot_common/db_base.py
from sqlalchemy.orm import declarative_base

Base = declarative_base()
