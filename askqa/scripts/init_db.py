
"""Create the sample retail tables (vendors, products, customers, orders, orderitems) in a dev database"""

import asyncio
from askqa.core.config import get_settings
from askqa.core.logging import get_logger
from askqa.db.connection import Database
from askqa.db.models import Base

logger = get_logger(__name__)


async def init_database():
    """Create every table in the sample schema that does not exist yet"""
    database = Database.from_settings(get_settings())
    try:
        async with database.engine.begin() as conn:
            logger.info("🧩 Creating tables...")
            for table in Base.metadata.sorted_tables:
                await conn.run_sync(table.create, checkfirst=True)
                logger.info(f"✓ {table.name} table ready")

        logger.info("✅ Database initialization complete!")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(init_database())
