"""Database initialization script."""
from salesops.config.database import init_db
from salesops.models import Quote, QuoteItem, Order, OrderItem, NumberSequence  # noqa: F401


def create_tables():
    """Create all database tables."""
    print("Initializing database...")
    init_db()
    print("Database initialized successfully.")


if __name__ == "__main__":
    create_tables()
