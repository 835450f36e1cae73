from sqlalchemy import Column, Integer, String, Text, Float, Date, DateTime, ForeignKey, Table, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base

# Many-to-many link between movies and their cast (set semantics)
movie_actors = Table(
    "movie_actors",
    Base.metadata,
    Column("movie_id", Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("actor_id", Integer, ForeignKey("actors.id", ondelete="CASCADE"), primary_key=True),
)


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    genre = Column(String(100), nullable=False, index=True)
    release_date = Column(Date, nullable=False)
    duration = Column(Float, nullable=False)  # minutes
    director_id = Column(Integer, ForeignKey("directors.id", ondelete="SET NULL"), nullable=True, index=True)
    rating = Column(Float, nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    country = Column(String(100), nullable=True)
    teaser_url = Column(String(500), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="movies")
    director = relationship("Director", back_populates="movies")
    actors = relationship("Actor", secondary=movie_actors, back_populates="movies", order_by="Actor.id")

    __table_args__ = (
        CheckConstraint("duration > 0", name="movie_duration_positive"),
        CheckConstraint("rating >= 0 AND rating <= 10", name="movie_rating_range"),
    )

    def __repr__(self):
        return f"<Movie(id={self.id}, title={self.title}, user_id={self.user_id})>"
