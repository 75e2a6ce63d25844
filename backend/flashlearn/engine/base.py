"""
Base Engine
Abstract base class for the learning engines.
Provides common interface, logging, and service access.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any

from flashlearn.config import Settings, get_settings
from flashlearn.services.cosmos_db_service import CosmosDBService, cosmos_db_service


class BaseEngine(ABC):
    """
    Abstract base class for all engines.

    Each engine should:
    - Handle a specific concern (questions, daily widget)
    - Reach storage only through its db_service
    - Log its operations for debugging
    """

    def __init__(
        self,
        settings: Settings | None = None,
        db_service: CosmosDBService | None = None
    ):
        """
        Initialize base engine with services.

        Args:
            settings: Application settings (uses singleton if not provided)
            db_service: Cosmos DB service (uses singleton if not provided)
        """
        self.settings = settings or get_settings()
        self.db_service = db_service or cosmos_db_service

        # Setup logging for this engine
        self.logger = logging.getLogger(f"engine.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine name for logging and identification"""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Engine description for documentation"""
        pass

    def log_start(self, operation: str, context: dict | None = None) -> None:
        """Log the start of an engine operation"""
        msg = f"[{self.name}] {operation} started"
        if context:
            msg += f" - Context: {context}"
        self.logger.info(msg)

    def log_complete(self, operation: str, result: Any = None) -> None:
        """Log the outcome of an engine operation"""
        msg = f"[{self.name}] {operation} complete"
        if result:
            msg += f" - Result: {result}"
        self.logger.info(msg)

    def log_error(self, error: Exception, context: dict | None = None) -> None:
        """Log an engine error before it propagates"""
        msg = f"[{self.name}] Error: {error}"
        if context:
            msg += f" - Context: {context}"
        self.logger.error(msg, exc_info=True)

    def log_debug(self, message: str, data: Any = None) -> None:
        """Log debug information"""
        msg = f"[{self.name}] {message}"
        if data:
            msg += f" - Data: {data}"
        self.logger.debug(msg)
