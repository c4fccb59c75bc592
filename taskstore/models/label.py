from sqlalchemy import Column, Integer, Text
from taskstore.database import Base

class Label(Base):
    __tablename__ = "labels"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)  # unique in practice, not enforced
