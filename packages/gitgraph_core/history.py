"""Commit history loading for gitgraph.

Runs ``git log`` in topological order and parses its output into commits
whose hashes are interned into the caller's pool.

Execution Context:
    Library module - imported by the CLI log command and the TUI

Dependencies:
    - git: executable on PATH

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from gitgraph_core.hash_pool import HashPool
from gitgraph_core.models import Commit

logger = logging.getLogger(__name__)


# ---- Configuration Constants --------------------------------------------------------------------------------


FIELD_SEPARATOR = "\x00"
RECORD_SEPARATOR = "\x1e"

# hash, parents, author name, author email, author date, decorations, subject
LOG_FORMAT = "%x1e" + "%x00".join(["%H", "%P", "%an", "%ae", "%at", "%D", "%s"])
LOG_FIELD_COUNT = 7

GIT_TIMEOUT_SECONDS = 60


# ---- Command Building ---------------------------------------------------------------------------------------


def build_log_command(
        limit: int | None = None,
        all_branches: bool = False,
        filter_path: str | None = None,
        ref: str | None = None,
) -> list[str]:
    """Build the ``git log`` argv.

    Args:
        limit: Maximum number of commits.
        all_branches: Include every ref instead of HEAD only.
        filter_path: Only show commits touching this path.
        ref: Starting revision (defaults to HEAD).

    Returns:
        Command arguments for subprocess.
    """
    cmd = [
        "git",
        "-c", "log.showSignature=false",
        "log",
        "--topo-order",
        "--no-color",
        f"--format={LOG_FORMAT}",
    ]
    if limit:
        cmd.append(f"-n{limit}")
    if all_branches:
        cmd.append("--all")
    elif ref:
        cmd.append(ref)
    if filter_path:
        cmd.extend(["--", filter_path])
    return cmd


# ---- Parsing ------------------------------------------------------------------------------------------------


def _parse_refs(
        decorations: str,
) -> tuple[str, ...]:
    refs = []
    for ref in decorations.split(","):
        ref = ref.strip()
        if not ref:
            continue
        if ref.startswith("HEAD -> "):
            refs.append("HEAD")
            ref = ref[len("HEAD -> "):]
        elif ref.startswith("tag: "):
            ref = ref[len("tag: "):]
        refs.append(ref)
    return tuple(refs)


def parse_log_output(
        output: str,
        pool: HashPool,
) -> list[Commit]:
    """Parse ``git log`` output produced with ``LOG_FORMAT``.

    Args:
        output: Raw stdout of the log command.
        pool: Pool to intern hashes into.

    Returns:
        Commits in the order git printed them.

    Raises:
        ValueError: If a record does not have the expected fields.
    """
    commits = []
    for record in output.split(RECORD_SEPARATOR):
        record = record.strip("\n")
        if not record.strip():
            continue

        fields = record.split(FIELD_SEPARATOR)
        if len(fields) < LOG_FIELD_COUNT:
            msg = f"Malformed log record ({len(fields)} fields): {record[:80]!r}"
            raise ValueError(msg)

        commit_hash, parents, author_name, author_email, timestamp, decorations = fields[:6]
        # the subject is last and may itself contain separators
        subject = FIELD_SEPARATOR.join(fields[6:])
        if not commit_hash:
            msg = f"Log record without a hash: {record[:80]!r}"
            raise ValueError(msg)

        try:
            unix_timestamp = int(timestamp) if timestamp else 0
        except ValueError as time_error:
            msg = f"Invalid timestamp '{timestamp}' for commit {commit_hash}"
            raise ValueError(msg) from time_error

        commits.append(
            Commit.create(
                pool,
                commit_hash,
                parents.split(),
                name=subject,
                author_name=author_name,
                author_email=author_email,
                unix_timestamp=unix_timestamp,
                refs=_parse_refs(decorations),
            )
        )
    return commits


# ---- Repository Access --------------------------------------------------------------------------------------


def find_repository(
        start_path: Path | str | None = None,
) -> Path | None:
    """Find the git working tree containing a directory.

    Args:
        start_path: Directory to start searching from.

    Returns:
        Repository root if found, None otherwise.
    """
    current = Path(start_path or Path.cwd()).resolve()

    while True:
        if (current / ".git").exists():
            return current
        if current == current.parent:
            return None
        current = current.parent


def load_commits(
        repo_path: Path | str,
        pool: HashPool,
        limit: int | None = None,
        all_branches: bool = False,
        filter_path: str | None = None,
        ref: str | None = None,
) -> list[Commit]:
    """Load commits from a git repository.

    Args:
        repo_path: Repository working tree.
        pool: Pool to intern hashes into.
        limit: Maximum number of commits.
        all_branches: Include every ref instead of HEAD only.
        filter_path: Only show commits touching this path.
        ref: Starting revision (defaults to HEAD).

    Returns:
        Commits, children before parents.

    Raises:
        RuntimeError: If git cannot be run or exits with an error.
    """
    cmd = build_log_command(
        limit=limit,
        all_branches=all_branches,
        filter_path=filter_path,
        ref=ref,
    )
    logger.debug(f"Running {' '.join(cmd)} in {repo_path}")

    try:
        result = subprocess.run(
            cmd,
            cwd=str(repo_path),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except FileNotFoundError as git_error:
        msg = "git executable not found on PATH"
        raise RuntimeError(msg) from git_error
    except subprocess.TimeoutExpired as timeout_error:
        msg = f"git log timed out after {GIT_TIMEOUT_SECONDS}s"
        raise RuntimeError(msg) from timeout_error

    if result.returncode != 0:
        stderr = result.stderr.strip()
        # a fresh repository has no HEAD yet
        if "does not have any commits" in stderr:
            logger.debug(f"No commits in {repo_path}")
            return []
        msg = f"git log failed: {stderr or f'exit code {result.returncode}'}"
        raise RuntimeError(msg)

    commits = parse_log_output(result.stdout, pool)
    logger.debug(f"Loaded {len(commits)} commits from {repo_path}")
    return commits
