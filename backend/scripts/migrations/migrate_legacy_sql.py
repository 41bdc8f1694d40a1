#!/usr/bin/env python3
"""
Data Migration: Legacy SQL -> Store
===================================

Copies products, customers and orders (with their order_items) from the
legacy relational database into the application store.

Target tables are emptied before being refilled. Run it once.

Environment:
    DATABASE_URL          application store
    LEGACY_DB_DRIVER      SQLAlchemy driver (default mysql+pymysql)
    LEGACY_DB_HOST / LEGACY_DB_USER / LEGACY_DB_PASSWORD /
    LEGACY_DB_NAME / LEGACY_DB_PORT (default 3306)

Usage:
    pip install -e ".[migration]"
    cd backend
    python scripts/migrations/migrate_legacy_sql.py

Exit codes:
    0  migration completed
    1  any step failed
"""
import sys
import logging
from pathlib import Path

# Add backend to path
BACKEND_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(BACKEND_DIR))

from dotenv import load_dotenv

load_dotenv(BACKEND_DIR / '.env')

from storefront.core.config import Settings, configure_logging
from storefront.core.database import Database
from storefront.services.migration_service import LegacyMigration, build_legacy_engine

logger = logging.getLogger(__name__)


def main() -> int:
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)

    db = Database(settings.DATABASE_URL)
    engine = None

    try:
        engine = build_legacy_engine(settings)
        db.connect(max_retries=settings.DB_CONNECT_RETRIES, retry_delay=settings.DB_RETRY_DELAY)
        db.init_schema()

        result = LegacyMigration(engine, db).run()

        print("\n" + "=" * 60)
        print("  Migration summary")
        print("=" * 60)
        print(f"  Products:  {result.products_migrated}")
        print(f"  Customers: {result.customers_migrated}")
        print(f"  Orders:    {result.orders_migrated}")
        print(f"  Duration:  {result.duration_seconds}s")
        return 0

    except Exception:
        logger.exception("Migration failed")
        return 1

    finally:
        db.close()
        if engine is not None:
            engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
