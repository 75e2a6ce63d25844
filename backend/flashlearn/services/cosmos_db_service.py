"""
Azure Cosmos DB Service
Provides data persistence for flashcards, proficiency progress, daily widget
sessions, widget word history and streaks.
Per-user containers use user_id as partition key; flashcards use topic_id.
"""
import logging
import random
from datetime import datetime
from typing import Optional
from azure.cosmos import CosmosClient, PartitionKey, exceptions

from flashlearn.config import settings

logger = logging.getLogger(__name__)


class CosmosDBService:
    """Service for Azure Cosmos DB operations"""

    def __init__(self, client: CosmosClient | None = None):
        self._client = client
        self.database_name = settings.COSMOS_DB_DATABASE_NAME
        self.database = None
        self.containers = {}

        # Container names from settings
        self.container_names = {
            "flashcards": settings.COSMOS_DB_FLASHCARDS_CONTAINER,
            "flashcard_progress": settings.COSMOS_DB_FLASHCARD_PROGRESS_CONTAINER,
            "daily_sessions": settings.COSMOS_DB_DAILY_SESSIONS_CONTAINER,
            "widget_history": settings.COSMOS_DB_WIDGET_HISTORY_CONTAINER,
            "streaks": settings.COSMOS_DB_STREAKS_CONTAINER
        }

    @property
    def client(self) -> CosmosClient:
        """Cosmos client, created on first use."""
        if self._client is None:
            self._client = CosmosClient(
                url=settings.COSMOS_DB_ENDPOINT,
                credential=settings.COSMOS_DB_KEY
            )
        return self._client

    async def initialize(self):
        """Initialize database and containers. Call on app startup."""
        try:
            # Create database if not exists
            self.database = self.client.create_database_if_not_exists(
                id=self.database_name
            )
            logger.info(f"Database '{self.database_name}' ready")

            # Create containers if not exist
            for key, container_name in self.container_names.items():
                container = self.database.create_container_if_not_exists(
                    id=container_name,
                    partition_key=PartitionKey(path="/partitionKey"),
                    offer_throughput=400  # Minimum RU/s
                )
                self.containers[key] = container
                logger.info(f"Container '{container_name}' ready")

            return True
        except Exception as e:
            logger.error(f"Cosmos DB initialization error: {e}")
            raise

    def _get_container(self, container_key: str):
        """Get a container by key."""
        if container_key not in self.containers:
            # Lazy initialization
            container_name = self.container_names.get(container_key)
            if not container_name:
                raise ValueError(f"Unknown container key: {container_key}")
            if not self.database:
                self.database = self.client.get_database_client(self.database_name)
            self.containers[container_key] = self.database.get_container_client(container_name)
        return self.containers[container_key]

    # ==================== GENERIC CRUD OPERATIONS ====================

    async def get_item(
        self,
        container_key: str,
        item_id: str,
        partition_key: str
    ) -> Optional[dict]:
        """Get an item by ID and partition key."""
        try:
            container = self._get_container(container_key)
            item = container.read_item(item=item_id, partition_key=partition_key)
            return item
        except exceptions.CosmosResourceNotFoundError:
            return None
        except Exception as e:
            logger.error(f"Get item error in {container_key}: {e}")
            raise

    async def upsert_item(
        self,
        container_key: str,
        item: dict,
        partition_key: str
    ) -> dict:
        """Create or update an item."""
        try:
            container = self._get_container(container_key)
            item["partitionKey"] = partition_key
            item["updatedAt"] = datetime.utcnow().isoformat()
            if "createdAt" not in item:
                item["createdAt"] = datetime.utcnow().isoformat()
            result = container.upsert_item(body=item)
            logger.debug(f"Upserted item in {container_key}: {item.get('id')}")
            return result
        except Exception as e:
            logger.error(f"Upsert item error in {container_key}: {e}")
            raise

    async def query_items(
        self,
        container_key: str,
        query: str,
        parameters: Optional[list] = None,
        partition_key: Optional[str] = None
    ) -> list:
        """Query items using SQL."""
        try:
            container = self._get_container(container_key)
            items = list(container.query_items(
                query=query,
                parameters=parameters or [],
                partition_key=partition_key,
                enable_cross_partition_query=partition_key is None
            ))
            return items
        except Exception as e:
            logger.error(f"Query error in {container_key}: {e}")
            raise

    # ==================== FLASHCARDS ====================

    async def get_flashcard(self, flashcard_id: str) -> Optional[dict]:
        """Get a flashcard by ID (any topic)."""
        query = "SELECT * FROM c WHERE c.id = @id"
        parameters = [{"name": "@id", "value": flashcard_id}]
        results = await self.query_items("flashcards", query, parameters)
        return results[0] if results else None

    async def get_topic_flashcards(self, topic_id: str) -> list:
        """Get all flashcards of a topic."""
        query = "SELECT * FROM c WHERE c.partitionKey = @topic_id"
        parameters = [{"name": "@topic_id", "value": topic_id}]
        return await self.query_items("flashcards", query, parameters, topic_id)

    # ==================== FLASHCARD PROGRESS ====================

    async def get_flashcard_progress(self, user_id: str, flashcard_id: str) -> Optional[dict]:
        """Get a user's progress on one flashcard."""
        item_id = f"{user_id}_{flashcard_id}"
        return await self.get_item("flashcard_progress", item_id, user_id)

    async def update_flashcard_progress(
        self,
        user_id: str,
        flashcard_id: str,
        progress_data: dict
    ) -> dict:
        """Update or create a user's progress on one flashcard."""
        progress_data["id"] = f"{user_id}_{flashcard_id}"
        progress_data["userId"] = user_id
        progress_data["flashcardId"] = flashcard_id
        return await self.upsert_item("flashcard_progress", progress_data, user_id)

    async def get_mastered_flashcard_ids(self, user_id: str) -> list:
        """Ids of the flashcards a user has mastered."""
        query = """
            SELECT VALUE c.flashcardId FROM c
            WHERE c.partitionKey = @user_id
            AND c.status = 'MASTERED'
        """
        parameters = [{"name": "@user_id", "value": user_id}]
        return await self.query_items("flashcard_progress", query, parameters, user_id)

    async def query_eligible_spotlight_candidate(
        self,
        user_id: str,
        exclude_ids: list[str]
    ) -> Optional[dict]:
        """
        Pick one flashcard for the daily widget.

        Eligible: mastered by the user, never answered correctly in the
        widget, and not in ``exclude_ids``. Returns None if nothing is left.
        """
        mastered = await self.get_mastered_flashcard_ids(user_id)
        if not mastered:
            return None

        excluded = set(exclude_ids) | set(await self.get_correct_widget_flashcard_ids(user_id))
        eligible = [fid for fid in dict.fromkeys(mastered) if fid not in excluded]

        # Cards deleted from the deck may still have progress rows
        while eligible:
            flashcard_id = random.choice(eligible)
            card = await self.get_flashcard(flashcard_id)
            if card:
                return card
            eligible.remove(flashcard_id)
        return None

    # ==================== DAILY WIDGET SESSIONS ====================

    async def get_daily_session(self, user_id: str, date: str) -> Optional[dict]:
        """Get a user's widget session for a day."""
        return await self.get_item("daily_sessions", f"{user_id}_{date}", user_id)

    async def upsert_daily_session(self, session_data: dict) -> dict:
        """Create or update a widget session."""
        return await self.upsert_item("daily_sessions", session_data, session_data["userId"])

    # ==================== WIDGET WORD HISTORY ====================

    async def get_correct_widget_flashcard_ids(self, user_id: str) -> list:
        """Ids of flashcards the user ever answered correctly in the widget."""
        query = """
            SELECT VALUE c.flashcardId FROM c
            WHERE c.partitionKey = @user_id
            AND c.isCorrect = true
        """
        parameters = [{"name": "@user_id", "value": user_id}]
        return await self.query_items("widget_history", query, parameters, user_id)

    async def upsert_widget_history_correct(
        self,
        user_id: str,
        flashcard_id: str,
        date: str
    ) -> dict:
        """Record a correct widget answer, bumping the shown count of an existing record."""
        item_id = f"{user_id}_{flashcard_id}"
        existing = await self.get_item("widget_history", item_id, user_id)

        record = {
            "id": item_id,
            "userId": user_id,
            "flashcardId": flashcard_id,
            "firstShownDate": existing.get("firstShownDate", date) if existing else date,
            "lastShownDate": date,
            "shownCount": existing.get("shownCount", 0) + 1 if existing else 1,
            "isCorrect": True
        }
        if existing and "createdAt" in existing:
            record["createdAt"] = existing["createdAt"]
        return await self.upsert_item("widget_history", record, user_id)

    async def get_widget_history(
        self,
        user_id: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None
    ) -> list:
        """Correct widget history records, newest first, within an optional date range."""
        query = """
            SELECT * FROM c
            WHERE c.partitionKey = @user_id
            AND c.isCorrect = true
        """
        parameters = [{"name": "@user_id", "value": user_id}]
        if from_date:
            query += " AND c.lastShownDate >= @from_date"
            parameters.append({"name": "@from_date", "value": from_date})
        if to_date:
            query += " AND c.lastShownDate <= @to_date"
            parameters.append({"name": "@to_date", "value": to_date})
        query += " ORDER BY c.lastShownDate DESC"
        return await self.query_items("widget_history", query, parameters, user_id)

    # ==================== STREAKS ====================

    async def get_user_streak(self, user_id: str) -> Optional[dict]:
        """Get a user's streak."""
        return await self.get_item("streaks", user_id, user_id)

    async def upsert_user_streak(self, streak_data: dict) -> dict:
        """Create or update a user's streak."""
        return await self.upsert_item("streaks", streak_data, streak_data["userId"])


# Singleton instance
cosmos_db_service = CosmosDBService()
