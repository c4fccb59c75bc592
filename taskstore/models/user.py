from sqlalchemy import Column, Integer, Text
from taskstore.database import Base

# id 0 is the "default" user that tasks point at until assigned
DEFAULT_USER_ID = 0

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
