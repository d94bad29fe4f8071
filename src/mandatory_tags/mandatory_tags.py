from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cli import ParsedArgs
    from .source import SourceResolver


def run(args: ParsedArgs, resolver: SourceResolver) -> str:
    """Resolve, fetch and check the branch's main.tf; return the success report."""
    from .errors import ConfigurationError
    from .scanner import check_all_aws_providers
    from .source import resource_path
    from .writer import build_report, report_to_string, searching_line, write_stdout

    if not args.branch:
        raise ConfigurationError("BRANCH_NAME must be set.")

    namespace = args.namespace or resolver.resolve_changed_namespace(args.branch)
    path = resource_path(namespace)
    if args.output_format == "text":
        write_stdout(searching_line(path, args.branch))
    else:
        # Structured reports own stdout
        print(searching_line(path, args.branch), end="", file=sys.stderr)

    content = resolver.read_file_at_branch(args.branch, path)
    logging.info(f"Read {len(content)} characters from {args.branch}:{path}")

    providers = check_all_aws_providers(content)
    report = build_report(providers, branch=args.branch, path=path, namespace=namespace)
    return report_to_string(report, args.output_format)


def main(argv: list[str] | None = None, resolver: SourceResolver | None = None) -> None:
    # Force UTF-8 for stdout on Windows (default cp1252 can't handle the report symbols)
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    from .cli import build_parser, parse_args
    from .errors import ConfigurationError, TagCheckError
    from .logger import setup_logging
    from .source import GitSourceResolver
    from .writer import write_stdout

    try:
        args = parse_args(argv)
        setup_logging(args.verbosity)

        if resolver is None:
            resolver = GitSourceResolver(args.repo_root, args.base_ref)

        try:
            write_stdout(run(args, resolver))
        except ConfigurationError as e:
            print(f"Error: {e.describe()}", file=sys.stderr)
            build_parser().print_help(sys.stderr)
            sys.exit(1)
        except TagCheckError as e:
            logging.debug(f"{type(e).__name__} raised", exc_info=True)
            print(f"Error: {e.describe()}", file=sys.stderr)
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)
    except BrokenPipeError:
        sys.stderr.close()
        sys.exit(141)


if __name__ == "__main__":
    main()
