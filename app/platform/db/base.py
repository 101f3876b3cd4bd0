from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base
from uuid_extension import uuid7

Base = declarative_base()


class BaseModel(Base):
    __abstract__ = True
    id = Column(String, primary_key=True, default=lambda: str(uuid7()), index=True)

# Note: Models will import this Base. Do not import models here to avoid circular imports.
# app.main imports the waitlist models before create_all runs.
