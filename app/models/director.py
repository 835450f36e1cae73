from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Director(Base):
    """
    Director record - owned by the user who created it
    Movies keep their row (with a null director) when the director is deleted
    """
    __tablename__ = "directors"

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
    owner = relationship("User", back_populates="directors")
    movies = relationship("Movie", back_populates="director")

    def __repr__(self):
        return f"<Director(id={self.id}, name={self.name}, user_id={self.user_id})>"
