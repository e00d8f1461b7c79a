"""Command line entry point for hacocms.

Fetches contents from the hacoCMS content API and prints them as JSON.
Credentials are read from HACOCMS_* environment variables.

Run with: python -m hacocms list /entries --limit 10 --sort=-publishedAt,id
          python -m hacocms single /about
          python -m hacocms content /entries abcdef --draft-token TOKEN
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

import httpx

from hacocms.api.client import HacoCmsClient
from hacocms.models import ApiContent, HacoCmsError, ListApiResponse, QueryValue
from hacocms.utils.logging import setup_logging


def _parse_filter(value: str) -> tuple[str, str]:
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key, val


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="hacocms", description="hacoCMS content API client")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Get contents of a list-type endpoint")
    list_parser.add_argument("endpoint", help="Endpoint of the list-type API")
    list_parser.add_argument("--limit", type=int, help="Maximum number of contents")
    list_parser.add_argument("--offset", type=int, help="Offset of the first content")
    list_parser.add_argument("--sort", dest="s", help="Sort expression, e.g. -publishedAt,id")
    list_parser.add_argument(
        "--query",
        type=_parse_filter,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Additional query parameter (repeatable)",
    )
    list_parser.add_argument(
        "--include-draft",
        action="store_true",
        help="Include drafts (requires HACOCMS_PROJECT_DRAFT_TOKEN)",
    )

    single_parser = subparsers.add_parser("single", help="Get the content of a single-type endpoint")
    single_parser.add_argument("endpoint", help="Endpoint of the single-type API")

    content_parser = subparsers.add_parser("content", help="Get one content by ID")
    content_parser.add_argument("endpoint", help="Endpoint of the list-type API")
    content_parser.add_argument("content_id", help="Content ID")
    content_parser.add_argument("--draft-token", help="Draft token of an unpublished content")

    return parser


def _dump_content(content: ApiContent) -> dict[str, Any]:
    return content.model_dump(mode="json", by_alias=True)


def _dump_list(result: ListApiResponse[ApiContent]) -> dict[str, Any]:
    return {
        "meta": result.meta.model_dump(mode="json"),
        "data": [_dump_content(item) for item in result.data],
    }


async def run(args: argparse.Namespace, client: HacoCmsClient) -> dict[str, Any]:
    """Run the selected command and return its JSON-ready result."""
    async with client:
        if args.command == "list":
            query: dict[str, QueryValue] = {"limit": args.limit, "offset": args.offset, "s": args.s}
            query.update(dict(args.query))
            if args.include_draft:
                result = await client.get_list_including_draft(ApiContent, args.endpoint, query)
            else:
                result = await client.get_list(ApiContent, args.endpoint, query)
            return _dump_list(result)
        if args.command == "single":
            return _dump_content(await client.get_single(ApiContent, args.endpoint))
        content = await client.get_content(ApiContent, args.endpoint, args.content_id, args.draft_token)
        return _dump_content(content)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        client = HacoCmsClient.from_env()
        output = asyncio.run(run(args, client))
    except HacoCmsError as e:
        print(f"Error [{e.code.value}]: {e.message}", file=sys.stderr)
        return 1
    except httpx.TransportError as e:
        print(f"Error [connection_error]: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
