"""Post commands."""

import click

from postledger.cli.error_handling import handle_domain_error
from postledger.domain.errors import DomainError
from postledger.domain.post import PostService
from postledger.domain.transaction import TransactionService


@click.group()
def post_group():
    """Write and read posts."""
    pass


@post_group.command("create")
@click.argument("content")
@click.option("--author", required=True, help="Author identifier")
@click.option("--persona", required=True, help="Persona the author posts as")
@click.option("--attachment", "attachments", multiple=True, help="Attachment reference (repeatable)")
@click.pass_context
def create_post(ctx, content: str, author: str, persona: str, attachments: tuple[str, ...]):
    """Create a post.

    Examples:
        postledger post create "Paid the March rent" --author u1 --persona "Office Manager"
    """
    service = PostService(ctx.obj["db"])

    try:
        post = service.create_post(
            author_id=author,
            author_persona=persona,
            content=content,
            attachments=list(attachments),
        )
        suggestion = service.check_financial_suggestion(post.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created post {post.id}")
    if suggestion.suggests_financial:
        click.echo(
            f"This post looks financial ({', '.join(suggestion.matched_terms)}). "
            f"Record it with 'transaction create {post.id}'."
        )


@post_group.command("list")
@click.pass_context
def list_posts(ctx):
    """List posts, newest first."""
    service = PostService(ctx.obj["db"])

    posts = service.list_posts()
    if not posts:
        click.echo("No posts found.")
        return

    click.echo(f"\nFound {len(posts)} post(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Author':<20} {'Transaction':<12} {'Content':<60}")
    click.echo("-" * 100)
    for p in posts:
        linked = str(p.transaction_id) if p.transaction_id is not None else "-"
        content = p.content.replace("\n", " ")[:60]
        click.echo(f"{p.id:<6} {p.author_persona[:20]:<20} {linked:<12} {content:<60}")


@post_group.command("show")
@click.argument("post_id", type=int)
@click.pass_context
def show_post(ctx, post_id: int):
    """Show a post, whether it looks financial and its transaction."""
    db = ctx.obj["db"]
    post_service = PostService(db)
    transaction_service = TransactionService(db)

    try:
        post = post_service.require_post(post_id)
        suggestion = post_service.check_financial_suggestion(post_id)
        txn = transaction_service.get_transaction_for_post(post_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Post ID: {post.id}")
    click.echo(f"  Author: {post.author_id} ({post.author_persona})")
    click.echo(f"  Created: {post.created_at}")
    click.echo(f"  Content: {post.content}")
    for attachment in post.attachments:
        click.echo(f"  Attachment: {attachment}")

    if suggestion.suggests_financial:
        click.echo(f"  Suggests financial activity: yes ({', '.join(suggestion.matched_terms)})")
    else:
        click.echo("  Suggests financial activity: no")

    if txn is None:
        click.echo("  Transaction: none")
    else:
        click.echo(f"  Transaction: {txn.id} ({txn.status.value})")


def register_commands(cli):
    """Register post commands with main CLI."""
    cli.add_command(post_group, name="post")
