from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

import pathspec

from .constants import BASE_PATH, DEFAULT_BASE_REF, RESOURCE_FILE
from .errors import ResolutionError, RetrievalError
from .git import GitError, get_changed_files, show_file_at_revision


def build_namespace_spec() -> pathspec.GitIgnoreSpec:
    return pathspec.GitIgnoreSpec.from_lines([f"/{BASE_PATH}/*/**"])


_NAMESPACE_SPEC = build_namespace_spec()


@runtime_checkable
class SourceResolver(Protocol):
    def resolve_changed_namespace(self, branch: str) -> str: ...

    def read_file_at_branch(self, branch: str, path: str) -> str: ...


def extract_namespace(changed_files: Iterable[str]) -> str | None:
    """Namespace directory of the first changed path under BASE_PATH, if any."""
    base_depth = len(PurePosixPath(BASE_PATH).parts)
    for path in changed_files:
        if not _NAMESPACE_SPEC.match_file(path):
            continue
        parts = PurePosixPath(path).parts
        # Files directly under BASE_PATH have no namespace directory.
        if len(parts) > base_depth + 1:
            return parts[base_depth]
    return None


def resource_path(namespace: str) -> str:
    return PurePosixPath(BASE_PATH, namespace, *RESOURCE_FILE).as_posix()


class GitSourceResolver:
    def __init__(self, repo_root: Path, base_ref: str = DEFAULT_BASE_REF) -> None:
        self.repo_root = repo_root
        self.base_ref = base_ref

    def resolve_changed_namespace(self, branch: str) -> str:
        diff_range = f"{self.base_ref}...{branch}"
        try:
            changed = get_changed_files(self.repo_root, diff_range)
        except GitError as e:
            raise ResolutionError(str(e)) from e

        logging.info(f"{len(changed)} file(s) changed in {diff_range}")
        namespace = extract_namespace(changed)
        if namespace is None:
            raise ResolutionError(f"could not extract namespace from changed files in branch: {branch}")

        logging.info(f"Resolved namespace '{namespace}' for branch {branch}")
        return namespace

    def read_file_at_branch(self, branch: str, path: str) -> str:
        try:
            return show_file_at_revision(self.repo_root, branch, path)
        except GitError as e:
            raise RetrievalError(str(e)) from e
