"""Command-line interface for the news publishing API."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

from ..errors import NewsApiError
from ..models import ArticleOptions, SearchOptions
from ..platforms.news import NewsApiClient
from ..services import PublishingService, load_bundle_directory
from ..settings import AppConfig, load_config
from ..utils.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        structured=not args.log_plain,
    )

    handler: Callable[[argparse.Namespace], int] | None = getattr(args, "handler", None)
    if handler is None:
        parser.print_help(sys.stderr)
        return 1

    try:
        return handler(args)
    except NewsApiError as exc:
        LOGGER.error(
            str(exc),
            extra={
                "event": "cli.error",
                "command": args.command,
                "error_type": type(exc).__name__,
            },
        )
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="newsbundle", description="News publishing API client")
    parser.add_argument("--config", help="Path to configuration file", default=None)
    parser.add_argument(
        "--log-plain",
        action="store_true",
        help="Use plain-text logs instead of JSON",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS certificate verification (testing against local servers only)",
    )

    subparsers = parser.add_subparsers(dest="command")

    _add_channel_commands(subparsers)
    _add_section_commands(subparsers)
    _add_article_commands(subparsers)
    _add_bundle_commands(subparsers)

    return parser


def _add_channel_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    channel_parser = subparsers.add_parser("channel", help="Channel information")
    channel_subparsers = channel_parser.add_subparsers(dest="channel_command", required=True)

    read_parser = channel_subparsers.add_parser("read", help="Show channel details")
    read_parser.add_argument("channel_id")
    read_parser.set_defaults(handler=_handle_channel_read)

    sections_parser = channel_subparsers.add_parser("sections", help="List the channel's sections")
    sections_parser.add_argument("channel_id")
    sections_parser.set_defaults(handler=_handle_sections_list)


def _add_section_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    section_parser = subparsers.add_parser("section", help="Section information")
    section_subparsers = section_parser.add_subparsers(dest="section_command", required=True)

    read_parser = section_subparsers.add_parser("read", help="Show section details")
    read_parser.add_argument("section_id")
    read_parser.set_defaults(handler=_handle_section_read)


def _add_article_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--bundle", type=Path, required=True, help="Directory holding article.json")
    parser.add_argument(
        "--live",
        action="store_true",
        help="Publish publicly instead of as a channel-only preview",
    )
    parser.add_argument("--issue-only", action="store_true", help="Only show inside an issue")
    parser.add_argument("--sponsored", action="store_true", help="Mark as sponsored content")
    parser.add_argument(
        "--maturity-rating",
        choices=("KIDS", "MATURE", "GENERAL"),
        default=None,
    )
    parser.add_argument(
        "--section",
        dest="sections",
        action="append",
        default=[],
        metavar="URL",
        help="Section URL to link the article to (repeatable)",
    )


def _add_article_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    article_parser = subparsers.add_parser("article", help="Create, read, update or delete articles")
    article_subparsers = article_parser.add_subparsers(dest="article_command", required=True)

    create_parser = article_subparsers.add_parser("create", help="Publish a bundle to a channel")
    create_parser.add_argument("--channel", required=True, dest="channel_id")
    _add_article_options(create_parser)
    create_parser.set_defaults(handler=_handle_article_create)

    update_parser = article_subparsers.add_parser("update", help="Replace an existing article")
    update_parser.add_argument("article_id")
    update_parser.add_argument("--revision", required=True)
    _add_article_options(update_parser)
    update_parser.set_defaults(handler=_handle_article_update)

    read_parser = article_subparsers.add_parser("read", help="Show article details")
    read_parser.add_argument("article_id")
    read_parser.set_defaults(handler=_handle_article_read)

    delete_parser = article_subparsers.add_parser("delete", help="Delete an article")
    delete_parser.add_argument("article_id")
    delete_parser.set_defaults(handler=_handle_article_delete)

    search_parser = article_subparsers.add_parser("search", help="Search articles")
    scope = search_parser.add_mutually_exclusive_group(required=True)
    scope.add_argument("--channel", dest="channel_id")
    scope.add_argument("--section", dest="section_id")
    search_parser.add_argument("--page-size", dest="page_size", type=int, default=None)
    search_parser.add_argument("--from-date", dest="from_date", default=None)
    search_parser.add_argument("--to-date", dest="to_date", default=None)
    search_parser.add_argument("--sort-dir", dest="sort_dir", choices=("ASC", "DESC"), default=None)
    search_parser.set_defaults(handler=_handle_article_search)


def _add_bundle_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    bundle_parser = subparsers.add_parser("bundle", help="Inspect bundles without sending them")
    bundle_subparsers = bundle_parser.add_subparsers(dest="bundle_command", required=True)

    encode_parser = bundle_subparsers.add_parser(
        "encode", help="Encode a bundle directory and print a summary of the body"
    )
    encode_parser.add_argument("bundle", type=Path)
    encode_parser.add_argument("--output", type=Path, default=None, help="Write the raw body here")
    encode_parser.set_defaults(handler=_handle_bundle_encode)


def _handle_channel_read(args: argparse.Namespace) -> int:
    _print_json(_client(args).read_channel(args.channel_id))
    return 0


def _handle_sections_list(args: argparse.Namespace) -> int:
    _print_json(_client(args).list_sections(args.channel_id))
    return 0


def _handle_section_read(args: argparse.Namespace) -> int:
    _print_json(_client(args).read_section(args.section_id))
    return 0


def _handle_article_create(args: argparse.Namespace) -> int:
    bundle = load_bundle_directory(args.bundle)
    service = PublishingService(_client(args))
    LOGGER.info(
        "Publishing bundle",
        extra={"event": "cli.command", "command": "article.create", "bundle": str(args.bundle)},
    )
    result = service.publish(bundle, channel_id=args.channel_id, options=_article_options(args))
    _print_json(result)
    return 0


def _handle_article_update(args: argparse.Namespace) -> int:
    bundle = load_bundle_directory(args.bundle)
    service = PublishingService(_client(args))
    LOGGER.info(
        "Updating article from bundle",
        extra={"event": "cli.command", "command": "article.update", "article_id": args.article_id},
    )
    result = service.publish(
        bundle,
        article_id=args.article_id,
        revision=args.revision,
        options=_article_options(args),
    )
    _print_json(result)
    return 0


def _handle_article_read(args: argparse.Namespace) -> int:
    _print_json(_client(args).read_article(args.article_id))
    return 0


def _handle_article_delete(args: argparse.Namespace) -> int:
    _client(args).delete_article(args.article_id)
    LOGGER.info(
        "Article deleted",
        extra={"event": "cli.command", "command": "article.delete", "article_id": args.article_id},
    )
    return 0


def _handle_article_search(args: argparse.Namespace) -> int:
    search = SearchOptions(
        page_size=args.page_size,
        from_date=args.from_date,
        to_date=args.to_date,
        sort_dir=args.sort_dir,
    )
    result = _client(args).search_articles(
        channel_id=args.channel_id,
        section_id=args.section_id,
        search=search,
    )
    _print_json(result)
    return 0


def _handle_bundle_encode(args: argparse.Namespace) -> int:
    bundle = load_bundle_directory(args.bundle)
    body = bundle.to_upload().encode()
    if args.output:
        args.output.write_bytes(body.buffer)
    _print_json(
        {
            "content_type": body.content_type,
            "content_length": body.content_length,
            "parts": [
                {
                    "name": part.name,
                    "filename": part.filename,
                    "content_type": part.content_type,
                    "size": part.size,
                }
                for part in body.parts
            ],
        }
    )
    return 0


def _article_options(args: argparse.Namespace) -> ArticleOptions:
    return ArticleOptions(
        is_preview=not args.live,
        is_issue_only=args.issue_only,
        is_sponsored=args.sponsored,
        maturity_rating=args.maturity_rating,
        sections=args.sections,
    )


def _load(args: argparse.Namespace) -> AppConfig:
    config = load_config(args.config)
    if args.insecure:
        LOGGER.warning(
            "TLS certificate verification disabled",
            extra={"event": "cli.insecure", "host": config.api.host},
        )
        config.api.verify_tls = False
    return config


def _client(args: argparse.Namespace) -> NewsApiClient:
    return NewsApiClient.from_config(_load(args))


def _print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


__all__ = ["main"]
