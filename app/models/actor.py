from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.movie import movie_actors


class Actor(Base):
    __tablename__ = "actors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    nationality = Column(String(100), nullable=False)
    birth_date = Column(Date, nullable=False)
    bio = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="actors")
    # Deleting an actor drops its rows from movie_actors
    movies = relationship("Movie", secondary=movie_actors, back_populates="actors")

    def __repr__(self):
        return f"<Actor(id={self.id}, name={self.name}, user_id={self.user_id})>"
