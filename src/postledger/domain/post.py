"""Post domain service."""

from typing import Optional

from postledger.database.base import Database
from postledger.domain import detector
from postledger.domain.entities import FinancialSuggestion, Post as PostEntity
from postledger.domain.errors import InvalidPost, post_not_found
from postledger.logging_config import get_logger

logger = get_logger(__name__)

POST_MAX_LENGTH = 500


class PostService:
    """Service for authoring and reading posts."""

    def __init__(self, db: Database):
        """Initialize post service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_post(
        self,
        author_id: str,
        author_persona: str,
        content: str,
        attachments: Optional[list[str]] = None,
    ) -> PostEntity:
        """Create a post.

        Args:
            author_id: Opaque identifier of the author
            author_persona: Persona label the author posts as
            content: Post text (trimmed, at most 500 characters)
            attachments: Optional attachment reference strings

        Returns:
            The created post

        Raises:
            InvalidPost: If any field is missing or out of bounds
        """
        errors = []
        content = (content or "").strip()
        if not content:
            errors.append("Post content is required")
        elif len(content) > POST_MAX_LENGTH:
            errors.append(f"Post content must be {POST_MAX_LENGTH} characters or less")
        if not author_id or not author_id.strip():
            errors.append("Author ID is required")
        if not author_persona or not author_persona.strip():
            errors.append("Author persona is required")

        cleaned_attachments = []
        for index, attachment in enumerate(attachments or [], start=1):
            if not attachment or not attachment.strip():
                errors.append(f"Attachment {index} cannot be empty")
            else:
                cleaned_attachments.append(attachment.strip())

        if errors:
            raise InvalidPost("; ".join(errors))

        post_id = self.db.create_post(
            author_id=author_id.strip(),
            author_persona=author_persona.strip(),
            content=content,
            attachments=cleaned_attachments,
        )
        logger.info("Created post %s by %s", post_id, author_id)
        return self.db.get_post(post_id)

    def get_post(self, post_id: int) -> Optional[PostEntity]:
        """Get post by ID, or None if not found."""
        return self.db.get_post(post_id)

    def require_post(self, post_id: int) -> PostEntity:
        """Get post by ID or raise NotFound."""
        post = self.db.get_post(post_id)
        if post is None:
            raise post_not_found(post_id)
        return post

    def list_posts(self) -> list[PostEntity]:
        """List posts, newest first."""
        return self.db.list_posts()

    def check_financial_suggestion(self, post_id: int) -> FinancialSuggestion:
        """Run the financial-activity detector over a stored post.

        Raises:
            NotFound: If the post does not exist
        """
        post = self.require_post(post_id)
        terms = detector.matched_terms(post.content)
        return FinancialSuggestion(
            post_id=post.id,
            suggests_financial=bool(terms),
            terms_version=detector.FINANCIAL_TERMS_VERSION,
            matched_terms=terms,
        )
