#!/usr/bin/env python3
"""
KUBESHELL CLI - List & Describe
-------------------------------
Thin command layer over the projection engine:
1. Subcommand Routing (get/describe)
2. Loading already-fetched resources (YAML/JSON dumps) from disk
3. Handing columns, sort and filter options to the list projection
4. Handing per-kind describe layouts to the describe evaluator

Author: KubeShell Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kubeshell.cli.formatter import KubeFormatter
from kubeshell.core.context import Env
from kubeshell.core.errors import KubeShellError
from kubeshell.core.models import Resource
from kubeshell.describe.evaluator import describe_object
from kubeshell.listing.projection import run_list
from kubeshell.resources.columns import LIST_SPECS, list_spec_for
from kubeshell.resources.descriptors import layout_for

logger = logging.getLogger("kubeshell.cli")

VERSION = "kubeshell v0.3.0"


def load_resources(path: Path) -> List[Resource]:
    """
    Reads every object from a YAML or JSON dump. Accepts `kind: List`
    wrappers (the output of `kubectl get -o yaml`) and multi-document streams.
    """
    yaml = YAML(typ="safe")
    items: List[Resource] = []
    with open(path, "r", encoding="utf-8-sig") as f:
        for doc in yaml.load_all(f):
            if doc is None:
                continue
            if isinstance(doc, dict) and isinstance(doc.get("items"), list):
                items.extend(i for i in doc["items"] if isinstance(i, dict))
            elif isinstance(doc, dict):
                items.append(doc)
            else:
                logger.warning(f"Skipping non-object document in {path}")
    return items


class KubeShellCLI:
    """
    CLI wrapper translating user commands into projection calls.
    Rendering goes through KubeFormatter so tests can capture it.
    """

    def __init__(self, console: Optional[Console] = None, env: Optional[Env] = None):
        self.console = console or Console()
        self.formatter = KubeFormatter(self.console)
        self.env = env or Env()
        self.parser = argparse.ArgumentParser(
            prog="kubeshell",
            description="KubeShell - list and describe Kubernetes resources",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-V", "--version", action="version", version=VERSION)
        self.parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        kinds = sorted(LIST_SPECS)

        get_parser = self.get_parser = subparsers.add_parser("get", help="List resources as a numbered table")
        get_parser.add_argument("kind", choices=kinds, metavar="KIND", help="Resource kind (pods, nodes, ...)")
        get_parser.add_argument("path", help="YAML/JSON dump of the resources")
        get_parser.add_argument("-s", "--sort", help="Sort by a column flag (e.g. name, age)")
        get_parser.add_argument("-r", "--reverse", action="store_true", help="Reverse the output order")
        get_parser.add_argument("--regex", help="Only show rows with a cell matching this regex")
        get_parser.add_argument("-S", "--show", nargs="+", default=[], metavar="FLAG",
                                help="Extra columns to show (e.g. ip node)")
        get_parser.add_argument("-L", "--labels", action="store_true", help="Show a Labels column")
        scope = get_parser.add_mutually_exclusive_group()
        scope.add_argument("-n", "--namespace", help="Only list objects in this namespace")
        scope.add_argument("-A", "--all-namespaces", action="store_true", help="List across all namespaces")

        describe_parser = subparsers.add_parser("describe", help="Describe one resource")
        describe_parser.add_argument("kind", choices=kinds, metavar="KIND", help="Resource kind")
        describe_parser.add_argument("path", help="YAML/JSON dump containing the resource")
        selector = describe_parser.add_mutually_exclusive_group()
        selector.add_argument("--item", type=int, default=1, help="1-based position of the object in the dump")
        selector.add_argument("--name", help="Name of the object to describe")

    def print_header(self, subtitle: str):
        self.console.print(Panel.fit(
            f"[bold cyan]{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _load(self, raw_path: str) -> Optional[List[Resource]]:
        """Loads resources, reporting failures. None is the 'nothing to show' signal."""
        path = Path(raw_path)
        if not path.is_file():
            self.formatter.error(f"Path '{raw_path}' not found.")
            return None
        try:
            return load_resources(path)
        except (OSError, YAMLError) as e:
            logger.error(f"Unable to load {path}: {e}")
            self.formatter.error(f"Could not read resources from '{raw_path}': {e}")
            return None

    def cmd_get(self, args: argparse.Namespace) -> int:
        spec = list_spec_for(args.kind)
        if args.sort and args.sort.lower() not in spec.sort_keys():
            # Exits with the usage message, nothing has been loaded or listed yet
            self.get_parser.error(
                f"invalid sort key '{args.sort}' for {args.kind} "
                f"(choose from {', '.join(spec.sort_keys())})"
            )
        self.env.namespace = None if args.all_namespaces else args.namespace

        items = self._load(args.path)
        if items is not None and args.namespace:
            items = [i for i in items if (i.get("metadata") or {}).get("namespace") == args.namespace]

        request = spec.request(
            sort_key=args.sort, reverse=args.reverse, pattern=args.regex,
            show=args.show, labels=args.labels,
        )
        run_list(self.env, self.formatter, request, items)
        return 0 if items is not None else 1

    def cmd_describe(self, args: argparse.Namespace) -> int:
        spec = list_spec_for(args.kind)
        layout = layout_for(spec.kind)

        items = self._load(args.path)
        if items is None:
            return 1

        target = self._select(items, args)
        if target is None:
            self.formatter.error(f"No {spec.kind} matching the selection in '{args.path}'.")
            return 1

        self.formatter.print_report(describe_object(target, layout))
        return 0

    def _select(self, items: Sequence[Resource], args: argparse.Namespace) -> Optional[Resource]:
        if args.name:
            for item in items:
                if (item.get("metadata") or {}).get("name") == args.name:
                    return item
            return None
        if 1 <= args.item <= len(items):
            return items[args.item - 1]
        return None

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit code."""
        argv = list(sys.argv[1:] if argv is None else argv)
        if not argv:
            self.print_header("Kubernetes List & Describe")
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

        try:
            if args.command == "get":
                return self.cmd_get(args)
            if args.command == "describe":
                return self.cmd_describe(args)
        except KubeShellError as e:
            logger.error(str(e))
            self.formatter.error(str(e))
            return 1

        self.parser.print_help()
        return 0


def main(argv: Optional[Sequence[Any]] = None):
    """Application entry point with interrupt handling."""
    cli = KubeShellCLI()
    try:
        sys.exit(cli.run(argv))
    except KeyboardInterrupt:
        cli.console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
