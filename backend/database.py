from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from dotenv import load_dotenv
import os
import logging
from pathlib import Path

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None
    db = None
    
    async def connect(self):
        try:
            mongo_url = os.environ['MONGO_URL']
            self.client = AsyncIOMotorClient(mongo_url)
            self.db = self.client[os.environ['DB_NAME']]
            # Verify connection
            await self.db.command("ping")
            logger.info(f"Connected to MongoDB: {os.environ['DB_NAME']}")
            
            await self._create_indexes()
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise
    
    async def close(self):
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")
    
    def get_db(self):
        return self.db
    
    async def _create_indexes(self):
        """Create MongoDB indexes for identifier, author and form lookups."""
        try:
            # Users - usernames are unique and never change
            await self.db.users.create_index("user_id", unique=True)
            await self.db.users.create_index("username", unique=True)
            
            # Forms - random reviewable selection filters on pending_requests and author
            await self.db.forms.create_index("form_id", unique=True)
            await self.db.forms.create_index("author_id")
            await self.db.forms.create_index("pending_requests")
            
            # Reviews - listed per form in submission order
            await self.db.reviews.create_index("review_id", unique=True)
            await self.db.reviews.create_index([("form_id", ASCENDING), ("created_at", ASCENDING)])
            
            # Credit ledger - history per user, newest first
            await self.db.credit_transactions.create_index("transaction_id", unique=True)
            await self.db.credit_transactions.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
            logger.info("MongoDB indexes created/verified")
        except Exception as e:
            # Indexes may already exist, log but don't fail
            logger.warning(f"Index creation note: {e}")

# Global database instance
database = Database()
