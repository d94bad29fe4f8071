# tests/conftest.py
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Add project root/src to PYTHONPATH for subprocess tests
PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / "src"

NAMESPACE_DIR = "namespaces/live.cloud-platform.service.justice.gov.uk"

FULL_TAGS = """    tags = {
      business-unit = "HMPPS"
      application   = "my-app"
      is-production = "true"
      owner         = "team: team@example.com"
      namespace     = "my-namespace"
      service-area  = "Hosting"
      source-code   = "https://github.com/example/repo"
      slack-channel = "#my-team"
    }
"""


def provider_block(alias=None, tags=FULL_TAGS, region="eu-west-2"):
    """Render a provider "aws" block; pass tags=None to omit default_tags."""
    lines = ['provider "aws" {', f'  region = "{region}"']
    if alias:
        lines.append(f'  alias  = "{alias}"')
    if tags is not None:
        lines.append("")
        lines.append("  default_tags {")
        lines.append(tags.rstrip("\n"))
        lines.append("  }")
    lines.append("}")
    return "\n".join(lines) + "\n"


def tags_without(*names):
    return "".join(line + "\n" for line in FULL_TAGS.splitlines() if line.split("=")[0].strip() not in names)


class FakeSourceResolver:
    """In-memory stand-in for GitSourceResolver."""

    def __init__(self, namespace="my-namespace", files=None, namespace_error=None, read_error=None):
        self.namespace = namespace
        self.files = files or {}
        self.namespace_error = namespace_error
        self.read_error = read_error
        self.calls = []

    def resolve_changed_namespace(self, branch):
        self.calls.append(("resolve", branch))
        if self.namespace_error:
            raise self.namespace_error
        return self.namespace

    def read_file_at_branch(self, branch, path):
        self.calls.append(("read", branch, path))
        if self.read_error:
            raise self.read_error
        return self.files[path]


class GitRepoHelper:
    def __init__(self, path: Path):
        self.repo = path

    def git(self, *args) -> str:
        result = subprocess.run(["git", *args], cwd=self.repo, capture_output=True, text=True, check=True)
        return result.stdout

    def add_file(self, path: str, content: str) -> Path:
        file_path = self.repo / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    def commit(self, message: str = "commit") -> str:
        self.git("add", "-A")
        self.git("commit", "-m", message)
        return self.git("rev-parse", "HEAD").strip()

    def branch(self, name: str) -> None:
        self.git("checkout", "-b", name)

    def checkout(self, name: str) -> None:
        self.git("checkout", name)


@pytest.fixture
def git_repo(tmp_path):
    """Temporary git repository with an initial commit on main."""
    repo_path = tmp_path / "environments_repo"
    repo_path.mkdir()
    subprocess.run(["git", "init"], cwd=repo_path, capture_output=True, check=True)
    subprocess.run(["git", "symbolic-ref", "HEAD", "refs/heads/main"], cwd=repo_path, capture_output=True, check=True)
    subprocess.run(["git", "config", "user.email", "test@test.com"], cwd=repo_path, capture_output=True, check=True)
    subprocess.run(["git", "config", "user.name", "Test"], cwd=repo_path, capture_output=True, check=True)
    subprocess.run(["git", "config", "commit.gpgsign", "false"], cwd=repo_path, capture_output=True, check=True)

    helper = GitRepoHelper(repo_path)
    helper.add_file("README.md", "# environments\n")
    helper.commit("Initial")
    return helper


@pytest.fixture
def branch_with_namespace(git_repo):
    """Branch 'add-tags' changing my-namespace's main.tf, left checked out on main."""

    def _make(content, namespace="my-namespace", branch="add-tags"):
        git_repo.branch(branch)
        git_repo.add_file(f"{NAMESPACE_DIR}/{namespace}/resources/main.tf", content)
        git_repo.commit(f"Update {namespace}")
        git_repo.checkout("main")
        return git_repo

    return _make


@pytest.fixture
def run_checker(monkeypatch):
    """Runs main() in-process with the given args; returns the exit code."""

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    def _run(args, resolver=None, env=None):
        with monkeypatch.context() as m:
            m.delenv("BRANCH_NAME", raising=False)
            m.delenv("NAMESPACE", raising=False)
            for key, value in (env or {}).items():
                m.setenv(key, value)
            from mandatory_tags.mandatory_tags import main

            try:
                main(args, resolver=resolver)
                return 0
            except SystemExit as e:
                return e.code

    yield _run

    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def run_checker_subprocess(args, cwd=None, **kwargs):
    """Run mandatory-tags as a subprocess with src on PYTHONPATH.

    BRANCH_NAME and NAMESPACE are cleared unless passed through ``env``.
    """
    command = [sys.executable, "-m", "mandatory_tags"] + args

    env = os.environ.copy()
    env.pop("BRANCH_NAME", None)
    env.pop("NAMESPACE", None)
    pythonpath = str(SRC_DIR)
    if "PYTHONPATH" in env:
        pythonpath = f"{pythonpath}{os.pathsep}{env['PYTHONPATH']}"
    env["PYTHONPATH"] = pythonpath

    if "env" in kwargs:
        env.update(kwargs["env"])
    kwargs["env"] = env

    kwargs.setdefault("capture_output", True)
    kwargs.setdefault("text", True)
    kwargs.setdefault("encoding", "utf-8")
    kwargs.setdefault("errors", "replace")

    return subprocess.run(command, cwd=cwd, **kwargs)
