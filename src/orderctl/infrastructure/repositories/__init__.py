"""Read/write repositories over the SQLAlchemy Core schema."""
