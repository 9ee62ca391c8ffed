#!/usr/bin/env python3
"""
Database initialization script.
Run ``python -m school_records.init_db`` to create all database tables.
"""

import os
import sys
import traceback

from sqlmodel import text


def main():
    """Initialize the database schema."""
    try:
        from school_records.configs.database import engine, init_db

        print("🗃️  Initializing database schema...")
        print(f"📄 Environment file: {os.getenv('ENV_FILE', 'local.env')}")

        # Test database connection first
        print("🔌 Testing database connection...")
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            print("✅ Database connection successful!")

        init_db()

        print("✅ Database schema created successfully!")

    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        print(f"📊 Error type: {type(e).__name__}")

        print("\n📋 Full error traceback:")
        traceback.print_exc()

        sys.exit(1)

if __name__ == "__main__":
    main()
