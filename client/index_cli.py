#!/usr/bin/env python3
"""
Search index tool script
To index pages by hand and inspect what the Redis index holds

Usage:
python index_cli.py --help
"""

import argparse
import os
import sys
from typing import List, Optional
from redis.exceptions import RedisError
from tabulate import tabulate

# Add project path to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from index import IndexStore, IndexStoreError  # noqa: E402


class IndexTool:
    """Search index tool class"""

    def __init__(self, index_store: IndexStore = None):
        self.index = index_store or IndexStore()

    def check_connection(self) -> bool:
        try:
            self.index.redis_client.ping()
            print("✅ Successfully connected to Redis")
            return True
        except Exception as e:
            print(f"❌ Failed to connect to Redis: {e}")
            return False

    def index_page(self, url: str, content: str, html: bool = False) -> None:
        """Index one page from text or HTML"""
        try:
            if html:
                n_terms = self.index.index_html(url, content)
            else:
                n_terms = self.index.index_page(url, content)
            print(f"✅ Indexed {url}: {n_terms} terms")
        except IndexStoreError as e:
            print(f"❌ Failed to index {url}: {e}")

    def show_urls(self, term: str) -> None:
        """Show the URLs where a term appears"""
        try:
            urls = sorted(self.index.get_urls(term))
            if not urls:
                print(f"❌ Term '{term}' is not indexed")
                return
            print(f"\n🔍 Term '{term}' appears on {len(urls)} pages:")
            for i, url in enumerate(urls, 1):
                print(f"  {i}. {url}")
        except IndexStoreError as e:
            print(f"❌ Failed to get URLs: {e}")

    def show_counts(self, term: str) -> None:
        """Show how often a term appears on each page, most frequent first"""
        try:
            counts = self.index.get_counts(term)
            if not counts:
                print(f"❌ Term '{term}' is not indexed")
                return
            table_data = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
            print(tabulate(table_data, headers=['URL', 'Count'], tablefmt='grid'))
        except IndexStoreError as e:
            print(f"❌ Failed to get counts: {e}")

    def show_count(self, url: str, term: str) -> None:
        try:
            print(self.index.get_count(url, term))
        except IndexStoreError as e:
            print(f"❌ {e}")

    def show_indexed(self, url: str) -> None:
        try:
            if self.index.is_indexed(url):
                print(f"✅ {url} is indexed")
            else:
                print(f"❌ {url} is not indexed")
        except IndexStoreError as e:
            print(f"❌ Failed to check {url}: {e}")

    def list_terms(self) -> List[str]:
        """Get all indexed terms"""
        try:
            return sorted(self.index.term_set())
        except IndexStoreError as e:
            print(f"❌ Failed to get term list: {e}")
            return []

    def dump(self) -> None:
        """Print the whole index"""
        try:
            rows = self.index.dump_index()
            if not rows:
                print("❌ Index is empty")
                return
            print(tabulate(rows, headers=['Term', 'URL', 'Count'], tablefmt='simple'))
        except IndexStoreError as e:
            print(f"❌ Failed to dump index: {e}")

    def delete(self, what: str, confirm: bool = False) -> None:
        """Delete URL sets, term counters or every key in the database"""
        actions = {
            'url-sets': ("all URLSet keys", self.index.delete_url_sets),
            'term-counters': ("all TermCounter keys", self.index.delete_term_counters),
            'all': ("ALL keys in the Redis database", self.index.delete_all_keys),
        }
        description, action = actions[what]

        if not confirm:
            print(f"⚠️  Deleting {description}")
            response = input("Confirm deletion? (y/N): ").strip().lower()
            if response != 'y':
                print("❌ Cancel deletion")
                return

        try:
            deleted = action()
            print(f"✅ Deleted {deleted} keys")
        except IndexStoreError as e:
            print(f"❌ Failed to delete keys: {e}")


def _read_content(path: Optional[str]) -> str:
    if path is None or path == '-':
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Search index tool')
    subparsers = parser.add_subparsers(
        dest='command', help='Available commands')

    # Index a page
    index_parser = subparsers.add_parser('index', help='Index a page')
    index_parser.add_argument('url', help='URL of the page')
    index_parser.add_argument(
        'file', nargs='?', help='File with the page content, stdin if omitted')
    index_parser.add_argument(
        '--html', action='store_true', help='Content is HTML, index its paragraphs')

    urls_parser = subparsers.add_parser(
        'urls', help='List the URLs where a term appears')
    urls_parser.add_argument('term', help='Search term')

    counts_parser = subparsers.add_parser(
        'counts', help='Show term counts per URL')
    counts_parser.add_argument('term', help='Search term')

    count_parser = subparsers.add_parser(
        'count', help='Show the count of a term at a URL')
    count_parser.add_argument('url', help='URL of the page')
    count_parser.add_argument('term', help='Search term')

    indexed_parser = subparsers.add_parser(
        'indexed', help='Check whether a URL is indexed')
    indexed_parser.add_argument('url', help='URL of the page')

    subparsers.add_parser('terms', help='List all indexed terms')
    subparsers.add_parser('dump', help='Print the whole index')

    # Delete keys
    for name, help_text in [('url-sets', 'Delete all URLSet keys'),
                            ('term-counters', 'Delete all TermCounter keys'),
                            ('all', 'Delete every key in the Redis database')]:
        delete_parser = subparsers.add_parser(f'delete-{name}', help=help_text)
        delete_parser.add_argument(
            '--yes', action='store_true', help='Skip confirmation')

    return parser


def main(argv: Optional[List[str]] = None, tool: Optional[IndexTool] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    # Initialize tool
    if tool is None:
        tool = IndexTool()
        if not tool.check_connection():
            sys.exit(1)

    # Execute command
    try:
        if args.command == 'index':
            tool.index_page(args.url, _read_content(args.file), args.html)

        elif args.command == 'urls':
            tool.show_urls(args.term)

        elif args.command == 'counts':
            tool.show_counts(args.term)

        elif args.command == 'count':
            tool.show_count(args.url, args.term)

        elif args.command == 'indexed':
            tool.show_indexed(args.url)

        elif args.command == 'terms':
            terms = tool.list_terms()
            if terms:
                print(f"\n📚 Found {len(terms)} terms:")
                for i, term in enumerate(terms, 1):
                    print(f"  {i}. {term}")
            else:
                print("❌ No terms found")

        elif args.command == 'dump':
            tool.dump()

        elif args.command.startswith('delete-'):
            tool.delete(args.command[len('delete-'):], args.yes)

    except KeyboardInterrupt:
        print("\n\n❌ Operation interrupted by user")
    except RedisError as e:
        print(f"\n❌ Redis error while executing command: {e}")
    except OSError as e:
        print(f"\n❌ Error occurred while executing command: {e}")


if __name__ == '__main__':
    main()
