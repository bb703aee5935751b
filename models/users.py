from sqlalchemy import Column, Integer, String, Boolean
from database.db import Base

class User(Base):
    __tablename__ = "users"  # login accounts

    id = Column(Integer, primary_key=True, index=True)          # user id (PK)
    username = Column(String(50), unique=True, nullable=False)  # login name
    password = Column(String(255), nullable=False)              # stored as given (no hashing)
    user_type = Column(String(20), nullable=False)              # admin / teacher / student
    flag = Column(Boolean, default=True)                        # account enabled
