from __future__ import annotations

import logging
import subprocess
from pathlib import Path, PurePosixPath


class GitError(Exception):
    pass


def run_git(repo_root: Path, args: list[str]) -> str:
    logging.debug(f"Running git {' '.join(args)} in {repo_root}")
    try:
        result = subprocess.run(
            ["git", "-C", str(repo_root), *args],
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
        return result.stdout
    except subprocess.CalledProcessError as e:
        output = (e.stderr or e.stdout or "").strip()
        raise GitError(f"git {' '.join(args)} failed with exit status {e.returncode} - {output}") from e
    except FileNotFoundError as e:
        raise GitError("git is not installed or not in PATH") from e


def get_changed_files(repo_root: Path, diff_range: str) -> list[str]:
    output = run_git(repo_root, ["diff", "--name-only", diff_range])
    return [line.strip() for line in output.splitlines() if line.strip()]


def show_file_at_revision(repo_root: Path, rev: str, rel_path: str | PurePosixPath) -> str:
    spec = f"{rev}:{PurePosixPath(rel_path).as_posix()}"
    return run_git(repo_root, ["show", spec])
