"""Git update checks for the server's own checkout."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

COMMIT_FORMAT = "--format=%h %s (%an, %ar)"


class UpdateCheckError(Exception):
    """Raised when a git command fails or times out."""
    pass


@dataclass
class UpdateStatus:
    branch: str
    behind: int
    ahead: int
    local_commit: str
    remote_commit: str

    @property
    def state(self) -> str:
        if self.behind and self.ahead:
            return "diverged"
        if self.behind:
            return "behind"
        if self.ahead:
            return "ahead"
        return "up_to_date"


class GitUpdateChecker:
    def __init__(self, repo_path, timeout: float = 10.0, remote: str = "origin"):
        self.repo_path = Path(repo_path)
        self.timeout = timeout
        self.remote = remote

    async def _run_git(self, *args: str) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                "git", *args,
                cwd=str(self.repo_path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            raise UpdateCheckError(f"Unable to run git: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise UpdateCheckError(f"git {args[0]} timed out after {self.timeout}s") from e

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip() or f"exit status {process.returncode}"
            raise UpdateCheckError(f"git {' '.join(args)} failed: {message}")
        return stdout.decode(errors="replace").strip()

    async def _count(self, revision_range: str) -> int:
        output = await self._run_git("rev-list", "--count", revision_range)
        try:
            return int(output)
        except ValueError as e:
            raise UpdateCheckError(f"Unexpected rev-list output: {output!r}") from e

    async def _branch(self) -> str:
        branch = await self._run_git("branch", "--show-current")
        if not branch:
            raise UpdateCheckError("Not on a branch (detached HEAD)")
        return branch

    async def check(self) -> UpdateStatus:
        """Fetch the remote and compare the current branch with it."""
        await self._run_git("fetch", self.remote)
        branch = await self._branch()
        upstream = f"{self.remote}/{branch}"

        behind = await self._count(f"HEAD..{upstream}")
        ahead = await self._count(f"{upstream}..HEAD")
        local_commit = await self._run_git("log", "-1", COMMIT_FORMAT)
        remote_commit = await self._run_git("log", "-1", COMMIT_FORMAT, upstream)

        return UpdateStatus(branch, behind, ahead, local_commit, remote_commit)

    async def behind_count(self) -> int:
        """Number of remote commits not yet pulled; used for the startup notice."""
        await self._run_git("fetch", self.remote)
        branch = await self._branch()
        return await self._count(f"HEAD..{self.remote}/{branch}")


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def format_update_status(status: UpdateStatus) -> str:
    icons = {"up_to_date": "✅", "behind": "🔄", "ahead": "🚀", "diverged": "⚡"}
    summaries = {
        "up_to_date": "Up to date",
        "behind": f"{_plural(status.behind, 'update')} available",
        "ahead": f"{_plural(status.ahead, 'local change')} ahead",
        "diverged": f"{_plural(status.behind, 'update')} available, {_plural(status.ahead, 'local change')} ahead",
    }

    lines: List[str] = [
        f"# {icons[status.state]} Git Repository Status\n",
        f"**Branch:** {status.branch}",
        f"**Status:** {summaries[status.state]}\n",
        '## Current State',
        f"**Local commit:** {status.local_commit}",
        f"**Remote commit:** {status.remote_commit}\n",
    ]

    if status.behind:
        verb = 'is' if status.behind == 1 else 'are'
        lines.append('## 💡 Available Updates')
        lines.append(f"There {verb} **{status.behind}** new commit{'s' if status.behind != 1 else ''} available.")
        lines.append(f"**To update:** Run `git pull origin {status.branch}` in your terminal, "
                     f"then restart the MCP server.\n")

    if status.ahead:
        lines.append('## 🚀 Local Changes')
        lines.append(f"You have **{status.ahead}** local commit{'s' if status.ahead != 1 else ''} "
                     f"that haven't been pushed.")
        lines.append(f"**To share:** Run `git push origin {status.branch}` in your terminal.\n")

    if status.state == "up_to_date":
        lines.append('## 🎉 All Good!')
        lines.append('Your local repository is in sync with the remote repository.')

    return '\n'.join(lines)


def format_update_failure(error: Exception) -> str:
    return '\n'.join([
        "# ❌ Git Update Check Failed\n",
        "Unable to check for updates from the git repository.",
        f"\n**Error:** {error}",
        '\n**Common Issues:**',
        '• Not in a git repository',
        '• No internet connection',
        '• Git not installed or configured',
        '• Repository access issues',
    ])
