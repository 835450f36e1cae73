"""
Import all models to ensure they are registered with SQLAlchemy
"""
from app.models.user import User
from app.models.movie import Movie, movie_actors
from app.models.director import Director
from app.models.actor import Actor

__all__ = [
    "User",
    "Movie",
    "Director",
    "Actor",
    "movie_actors",
]
