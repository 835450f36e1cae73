"""
Migration script to create all database tables

Run this script to create all database tables:
    python -m app.migrations.create_all_tables
"""

from app.database import engine, Base
# Import all models to ensure they're registered with Base
from app.models import User, Director, Actor, Movie  # noqa: F401


def create_tables():
    """Create all database tables"""
    print("=" * 60)
    print("Creating all database tables...")
    print("=" * 60)

    try:
        Base.metadata.create_all(bind=engine)

        print("\nAll tables created successfully!")
        print("\nTables created:")
        for table_name in Base.metadata.tables:
            print(f"   - {table_name}")
        print("=" * 60)

    except Exception as e:
        print(f"\nError creating tables: {e}")
        raise


if __name__ == "__main__":
    create_tables()
