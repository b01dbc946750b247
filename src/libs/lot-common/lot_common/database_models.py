# src/libs/lot-common/lot_common/database_models.py
#
# Read-only mappings of the master-data tables owned by the hosted catalog.
# The schema is managed upstream; nothing here creates or alters it.
from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import ARRAY

from .db_base import Base


class Quality(Base):
    __tablename__ = 'qualities'

    code = Column(String, primary_key=True)
    aliases = Column(ARRAY(Text), nullable=True)


class QualityColor(Base):
    __tablename__ = 'quality_colors'

    id = Column(String, primary_key=True)
    quality_code = Column(String, index=True, nullable=False)
    color_label = Column(String, nullable=False)
    color_code = Column(String, nullable=True)
