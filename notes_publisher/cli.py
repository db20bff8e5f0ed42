"""
notes-publisher: publish Markdown notes with wikilinks to a blog directory

Usage:
    notes-publisher init --source ~/notes --blog ~/blog/content --backup ~/backups
    notes-publisher publish                       # use the stored configuration
    notes-publisher publish --source DIR --blog DIR
    notes-publisher show-config
"""

import logging
from pathlib import Path
from typing import Optional

import click
from click.exceptions import ClickException, UsageError

from notes_publisher import __version__
from notes_publisher._logging import configure_logging
from notes_publisher.config import Config, ConfigurationError, config_path, load_config, save_config
from notes_publisher.core.models import PublishError, PublisherError
from notes_publisher.core.publisher import publish_from_config
from notes_publisher.transforms.frontmatter import FRONTMATTER_STYLES
from notes_publisher.transforms.links import LINK_STYLES

MISSING_ARGUMENT = "Both --source and --blog must be provided, or neither to use the stored configuration."


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="notes-publisher")
@click.option("-v", "--verbose", is_flag=True, help="Show debug messages.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Publish Markdown notes to a blog.

    Notes are Markdown files with a YAML frontmatter block (title, slug,
    status, tags, created_at, last_modified_at). Wikilinks such as
    [[Title]] or [[Title|text]] become links to the target note's slug.
    Only notes with 'status: publish' are written, as <slug>.md.
    """
    configure_logging(logging.DEBUG if verbose else None)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--source", required=True, type=click.Path(file_okay=False, path_type=Path),
              help="Directory containing the notes.")
@click.option("--blog", required=True, type=click.Path(file_okay=False, path_type=Path),
              help="Directory receiving the published notes.")
@click.option("--backup", type=click.Path(file_okay=False, path_type=Path),
              help="Directory where backups are stored.")
@click.option("--include-frontmatter", is_flag=True, help="Write frontmatter in published notes.")
@click.option("--link-style", type=click.Choice(sorted(LINK_STYLES)), default="relative",
              show_default=True, help="Format of resolved links.")
@click.option("--link-prefix", default="", help="URL prefix for the absolute link style.")
@click.option("--frontmatter-style", type=click.Choice(sorted(FRONTMATTER_STYLES)), default="identity",
              show_default=True, help="Shape of the written frontmatter.")
@click.option("--author", help="Author name for the hugo frontmatter style.")
def init(
    source: Path,
    blog: Path,
    backup: Optional[Path],
    include_frontmatter: bool,
    link_style: str,
    link_prefix: str,
    frontmatter_style: str,
    author: Optional[str],
):
    """Store the directories used by 'publish'."""
    config = Config(
        source_dir=source.expanduser(),
        blog_dir=blog.expanduser(),
        backup_dir=backup.expanduser() if backup else None,
        include_frontmatter=include_frontmatter,
        link_style=link_style,
        link_prefix=link_prefix,
        frontmatter_style=frontmatter_style,
        author=author,
    )
    try:
        path = save_config(config)
    except ConfigurationError as e:
        raise ClickException(str(e))
    click.echo(f"Configuration saved to {path}")


@cli.command("show-config")
def show_config():
    """Print the stored configuration."""
    try:
        config = load_config()
    except ConfigurationError as e:
        raise ClickException(str(e))
    click.echo(f"Configuration file: {config_path()}")
    for key, value in config.to_dict().items():
        click.echo(f"{key}: {value if value is not None else '-'}")


@cli.command()
@click.option("--source", type=click.Path(file_okay=False, path_type=Path),
              help="Directory containing the notes.")
@click.option("--blog", type=click.Path(file_okay=False, path_type=Path),
              help="Directory receiving the published notes.")
@click.option("--backup", type=click.Path(file_okay=False, path_type=Path),
              help="Back up source and blog to this directory first.")
@click.option("--no-backup", is_flag=True, help="Skip the backup.")
@click.option("--clean", is_flag=True, help="Empty the blog directory before publishing.")
@click.option("--dry-run", is_flag=True, help="Show what would be published without writing.")
@click.option("--with-frontmatter", is_flag=True, help="Write frontmatter in published notes.")
@click.option("--frontmatter-style", type=click.Choice(sorted(FRONTMATTER_STYLES)),
              help="Shape of the written frontmatter (implies --with-frontmatter).")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation.")
def publish(
    source: Optional[Path],
    blog: Optional[Path],
    backup: Optional[Path],
    no_backup: bool,
    clean: bool,
    dry_run: bool,
    with_frontmatter: bool,
    frontmatter_style: Optional[str],
    yes: bool,
):
    """Resolve wikilinks and publish notes to the blog directory."""
    if (source is None) != (blog is None):
        raise UsageError(MISSING_ARGUMENT)

    try:
        if source is not None:
            config = Config(source_dir=source.expanduser(), blog_dir=blog.expanduser())
        else:
            config = load_config()
        if backup is not None:
            config.backup_dir = backup.expanduser()
        if with_frontmatter:
            config.include_frontmatter = True
        if frontmatter_style is not None:
            config.include_frontmatter = True
            config.frontmatter_style = frontmatter_style
        config.validate()
    except ConfigurationError as e:
        raise ClickException(str(e))

    take_backup = not no_backup and config.backup_dir is not None
    if not no_backup and config.backup_dir is None:
        click.echo("Warning: no backup directory configured, publishing without backup.", err=True)

    if not yes and not dry_run:
        message = f"Publish notes from {config.source_dir} to {config.blog_dir}"
        if clean:
            message += f" (the content of {config.blog_dir} will be deleted)"
        click.confirm(message + "?", abort=True)

    try:
        result = publish_from_config(
            config,
            backup=take_backup,
            clean_destination=clean,
            dry_run=dry_run,
        )
    except PublishError as e:
        raise ClickException(f"{e} ({e.result.published_count} notes published)")
    except (PublisherError, ConfigurationError) as e:
        raise ClickException(str(e))

    if result.backup_dir is not None:
        click.echo(f"Backup: {result.backup_dir}")
    verb = "Would publish" if result.dry_run else "Published"
    click.echo(f"{verb} {result.published_count} notes to {config.blog_dir}")
    for slug in result.published_slugs:
        click.echo(f"  {slug}.md")
    for failure in result.failures:
        click.echo(f"Failed: {failure.path}: {failure.error}", err=True)
    if result.failures:
        raise click.exceptions.Exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
