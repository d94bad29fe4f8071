import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import DEFAULT_BASE_REF
from .version import __version__
from .writer import OUTPUT_FORMATS


@dataclass
class ParsedArgs:
    branch: str
    namespace: Optional[str]
    repo_root: Path
    base_ref: str
    output_format: str
    verbosity: int


ENVIRONMENT_HELP = """
Environment Variables:
  BRANCH_NAME  - The branch name to search
  NAMESPACE    - The namespace to search (skips detection from the branch diff)

Examples:
  mandatory-tags -branch=my-branch
  mandatory-tags -namespace=my-namespace -branch=my-branch
  NAMESPACE=my-namespace BRANCH_NAME=my-branch mandatory-tags
  mandatory-tags -h
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mandatory-tags",
        description=(
            "Branch Default Tags Checker. Searches a git branch for default_tags in the "
            "Terraform main.tf of the changed namespace and checks every AWS provider "
            "declares the required tags."
        ),
        epilog=ENVIRONMENT_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-branch",
        "--branch",
        dest="branch",
        default=os.environ.get("BRANCH_NAME", ""),
        help="The branch name to search (default: $BRANCH_NAME)",
    )
    parser.add_argument(
        "-namespace",
        "--namespace",
        dest="namespace",
        default=os.environ.get("NAMESPACE") or None,
        help="The namespace to search (default: $NAMESPACE, else detected from the branch diff)",
    )
    parser.add_argument("-C", "--repo", default=".", metavar="DIR", help="Git repository root (default: .)")
    parser.add_argument(
        "--base",
        default=DEFAULT_BASE_REF,
        metavar="REF",
        help=f"Base ref the branch is compared against (default: {DEFAULT_BASE_REF})",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Report format on success (default: text)",
    )
    parser.add_argument(
        "--log-level",
        choices=["error", "warning", "info", "debug"],
        default="error",
        help="Log level (default: error)",
    )
    return parser


def parse_args(argv: Optional[list[str]] = None) -> ParsedArgs:
    args = build_parser().parse_args(argv)

    repo_root = Path(args.repo).resolve()
    if not repo_root.is_dir():
        print(f"Error: Repository '{args.repo}' is not a directory.", file=sys.stderr)
        sys.exit(1)

    log_level_map = {"error": 0, "warning": 1, "info": 2, "debug": 3}

    return ParsedArgs(
        branch=args.branch.strip(),
        namespace=args.namespace.strip() if args.namespace else None,
        repo_root=repo_root,
        base_ref=args.base,
        output_format=args.format,
        verbosity=log_level_map[args.log_level],
    )
