from __future__ import annotations

import io
import json
import logging
import re
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from .scanner import ProviderRecord

OUTPUT_FORMATS = ("text", "yaml", "json")

_YAML_STRING_ESCAPE_PATTERN = re.compile(r'[\\"\n\r\x00\x85\u2028\u2029]')
_YAML_STRING_ESCAPE_MAP = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\x00": "\\0",
    "\x85": "\\x85",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _escape_yaml_string(s: str) -> str:
    if not _YAML_STRING_ESCAPE_PATTERN.search(s):
        return s
    return _YAML_STRING_ESCAPE_PATTERN.sub(lambda m: _YAML_STRING_ESCAPE_MAP[m.group()], s)


def searching_line(path: str, branch: str) -> str:
    return f"Searching for default_tags in {path} on branch {branch}...\n\n"


def build_report(
    providers: Sequence[ProviderRecord],
    *,
    branch: str,
    path: str,
    namespace: str,
) -> dict[str, Any]:
    return {
        "branch": branch,
        "namespace": namespace,
        "path": path,
        "providers": [{"name": p.name, "tags": list(p.tags)} for p in providers],
    }


def write_report_text(file: TextIO, report: dict[str, Any]) -> None:
    providers = report["providers"]
    file.write(f"✅ All {len(providers)} AWS provider(s) have the required tags\n\n")
    for provider in providers:
        file.write(f"Provider: {provider['name']}\n")
        file.write("Tags:\n")
        for tag in provider["tags"]:
            file.write(f"  ✓ {tag}\n")
        file.write("\n")


def write_report_yaml(file: TextIO, report: dict[str, Any]) -> None:
    for key in ("branch", "namespace", "path"):
        file.write(f'{key}: "{_escape_yaml_string(str(report[key]))}"\n')
    if not report["providers"]:
        file.write("providers: []\n")
        return
    file.write("providers:\n")
    for provider in report["providers"]:
        file.write(f'  - name: "{_escape_yaml_string(provider["name"])}"\n')
        if not provider["tags"]:
            file.write("    tags: []\n")
            continue
        file.write("    tags:\n")
        for tag in provider["tags"]:
            file.write(f'      - "{_escape_yaml_string(tag)}"\n')


def write_report_json(file: TextIO, report: dict[str, Any]) -> None:
    json.dump(report, file, ensure_ascii=False, indent=2)
    file.write("\n")


def report_to_string(report: dict[str, Any], output_format: str = "text") -> str:
    buf = io.StringIO()
    if output_format == "json":
        write_report_json(buf, report)
    elif output_format == "yaml":
        write_report_yaml(buf, report)
    else:
        write_report_text(buf, report)
    return buf.getvalue()


def write_stdout(content: str) -> None:
    try:
        buf = sys.stdout.buffer
    except AttributeError:
        buf = None

    if buf:
        utf8_stdout = io.TextIOWrapper(buf, encoding="utf-8", newline="")
        try:
            utf8_stdout.write(content)
            utf8_stdout.flush()
        finally:
            utf8_stdout.detach()
    else:
        sys.stdout.write(content)
        sys.stdout.flush()

    logging.debug(f"Wrote {len(content)} characters to stdout")
