"""
repositories/message_repo.py
-----------------------------
Data access layer for direct messages.
"""

from db.connection import Database
from models.message import Message
from utils.errors import AppError
from utils.logger import get_logger

logger = get_logger(__name__)


class MessageRepository:
    """Repository for CRUD operations on the messages table."""

    def __init__(self, db: Database):
        self.db = db

    async def create(self, sender_id: int, receiver_id: int, body: str) -> int:
        sql = "INSERT INTO messages (sender_id, receiver_id, message) VALUES (%s, %s, %s)"
        try:
            message_id = await self.db.insert(sql, (sender_id, receiver_id, body))
        except AppError as e:
            logger.error(f"Failed to send message from {sender_id} to {receiver_id}: {e}")
            raise
        logger.info(f"Message #{message_id} sent from user {sender_id} to user {receiver_id}")
        return message_id

    async def list_received(self, user_id: int) -> list[Message]:
        """Messages addressed to a user, newest first, with the sender's name."""
        sql = """
            SELECT m.id, m.sender_id, m.receiver_id, m.message, m.is_read, m.created_at,
                   u.full_name AS sender_name
            FROM messages m
            JOIN users u ON m.sender_id = u.id
            WHERE m.receiver_id = %s
            ORDER BY m.created_at DESC, m.id DESC
        """
        return [Message.from_row(r) for r in await self.db.fetch(sql, (user_id,))]

    async def mark_read(self, message_id: int, receiver_id: int) -> bool:
        """
        Flag a message as read, scoped to its receiver.

        Returns:
            True if the message exists and belongs to the receiver.
        """
        sql = "UPDATE messages SET is_read = TRUE WHERE id = %s AND receiver_id = %s"
        return await self.db.execute(sql, (message_id, receiver_id)) > 0
