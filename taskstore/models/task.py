import time
from sqlalchemy import Column, Integer, BigInteger, Text, ForeignKey, Table
from taskstore.database import Base

def epoch_now() -> int:
    return int(time.time())

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    opened = Column(BigInteger, nullable=False, default=epoch_now)          # creation time, epoch seconds
    closed = Column(BigInteger, default=0, server_default="0")              # 0 = still open
    author_id = Column(Integer, ForeignKey("users.id"), default=0, server_default="0")
    assigned_id = Column(Integer, ForeignKey("users.id"), default=0, server_default="0")
    title = Column(Text)
    content = Column(Text)


# Plain link table: no primary key, no payload
tasks_labels = Table(
    "tasks_labels",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("tasks.id")),
    Column("label_id", Integer, ForeignKey("labels.id")),
)
