"""Tests for the post service."""

import pytest

from postledger.domain.detector import FINANCIAL_TERMS_VERSION
from postledger.domain.errors import InvalidPost, NotFound


def test_create_post(post_service):
    post = post_service.create_post(
        author_id="user-1",
        author_persona="Founder",
        content="  Shipped the new landing page  ",
        attachments=["s3://bucket/screenshot.png"],
    )

    assert post.id is not None
    assert post.content == "Shipped the new landing page"
    assert post.attachments == ("s3://bucket/screenshot.png",)
    assert post.transaction_id is None


def test_create_post_without_attachments(post_service):
    post = post_service.create_post("user-1", "Founder", "Hello")

    assert post.attachments == ()


def test_create_post_collects_all_errors(post_service):
    with pytest.raises(InvalidPost) as exc_info:
        post_service.create_post(author_id="", author_persona=" ", content="")

    message = str(exc_info.value)
    assert "content is required" in message
    assert "Author ID is required" in message
    assert "persona is required" in message


def test_post_content_length_limit(post_service):
    assert post_service.create_post("u", "p", "x" * 500).content == "x" * 500

    with pytest.raises(InvalidPost):
        post_service.create_post("u", "p", "x" * 501)


def test_blank_attachment_rejected(post_service):
    with pytest.raises(InvalidPost, match="Attachment 2"):
        post_service.create_post("u", "p", "Receipt", attachments=["a.png", "  "])


def test_list_posts_newest_first(post_service):
    first = post_service.create_post("u", "p", "first")
    second = post_service.create_post("u", "p", "second")

    assert [p.id for p in post_service.list_posts()] == [second.id, first.id]


def test_require_post_missing(post_service):
    assert post_service.get_post(42) is None
    with pytest.raises(NotFound, match="Post 42 not found"):
        post_service.require_post(42)


def test_financial_suggestion(post_service, sample_post):
    suggestion = post_service.check_financial_suggestion(sample_post.id)

    assert suggestion.post_id == sample_post.id
    assert suggestion.suggests_financial is True
    assert "paid" in suggestion.matched_terms
    assert "$" in suggestion.matched_terms
    assert suggestion.terms_version == FINANCIAL_TERMS_VERSION


def test_financial_suggestion_negative(post_service):
    post = post_service.create_post("u", "p", "Team offsite planning")

    suggestion = post_service.check_financial_suggestion(post.id)

    assert suggestion.suggests_financial is False
    assert suggestion.matched_terms == ()
