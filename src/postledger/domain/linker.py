"""Post <-> transaction link.

A post points to zero or one transaction; a transaction points to exactly one
post. The link is written once, together with the transaction itself (see
``Database.create_transaction``), and never reassigned afterwards.
"""

from typing import Optional

from postledger.database.base import Database
from postledger.domain.errors import (
    AlreadyLinked,
    InvalidTransaction,
    post_not_found,
    transaction_not_found,
)
from postledger.logging_config import get_logger

logger = get_logger(__name__)


class PostLinker:
    """Maintains and exposes the post -> transaction reference."""

    def __init__(self, db: Database):
        self.db = db

    def link(self, post_id: int, transaction_id: int) -> None:
        """Point a post at the transaction it spawned.

        Only needed to restore a missing link; normal creation links
        atomically.

        Raises:
            NotFound: If the post or transaction does not exist
            InvalidTransaction: If the transaction belongs to another post
            AlreadyLinked: If the post already has a transaction
        """
        post = self.db.get_post(post_id)
        if post is None:
            raise post_not_found(post_id)
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise transaction_not_found(transaction_id)
        if transaction.post_id != post_id:
            raise InvalidTransaction(
                f"Transaction {transaction_id} originated from post {transaction.post_id}, "
                f"not post {post_id}"
            )
        if post.transaction_id is not None:
            raise AlreadyLinked(post_id, post.transaction_id)

        if not self.db.link_post_transaction(post_id, transaction_id):
            # Someone linked it between our read and the conditional write.
            raise AlreadyLinked(post_id, self.lookup(post_id))
        logger.info("Linked post %s to transaction %s", post_id, transaction_id)

    def lookup(self, post_id: int) -> Optional[int]:
        """Return the transaction ID linked to a post, or None.

        Raises:
            NotFound: If the post does not exist
        """
        post = self.db.get_post(post_id)
        if post is None:
            raise post_not_found(post_id)
        return post.transaction_id
