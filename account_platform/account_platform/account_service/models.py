from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .db import Base


class User(Base):
    __tablename__ = "users"
    user_id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False, index=True)
    # stored verbatim, see DESIGN.md
    password = Column(String, nullable=False)

    sessions = relationship("UserSession", back_populates="user")


class UserSession(Base):
    __tablename__ = "sessions"
    session_id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    token = Column(String(64), unique=True, nullable=False, index=True)

    user = relationship("User", back_populates="sessions")
