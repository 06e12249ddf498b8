"""GitHub API client using PyGitHub."""

import os
import time
from collections.abc import Iterator
from datetime import datetime

from github import Github
from github.GithubException import RateLimitExceededException, UnknownObjectException
from github.GitRelease import GitRelease
from github.Issue import Issue
from github.Label import Label
from github.NamedUser import NamedUser
from github.Repository import Repository
from rich.console import Console

from ..rules.actions import TriageAction
from .models import GitHubIssue, GitHubLabel, GitHubRelease, GitHubUser

console = Console()

LOCK_REASON = "resolved"


class GitHubClient:
    """GitHub API client with rate limiting and authentication."""

    def __init__(self, token: str | None = None, per_page: int = 100):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            per_page: Page size used for every paginated request.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.per_page = per_page
        self.github = Github(self.token, per_page=per_page)
        self._repositories: dict[str, Repository] = {}

    def _check_rate_limit(self) -> None:
        """Check rate limit and sleep if necessary."""
        try:
            rate_limit = self.github.get_rate_limit()
            remaining = rate_limit.core.remaining

            if remaining < 10:
                reset_time = rate_limit.core.reset.timestamp()
                sleep_time = reset_time - time.time() + 1
                console.print(
                    f"Rate limit low, sleeping for {sleep_time:.1f} seconds..."
                )
                time.sleep(sleep_time)

        except Exception:
            # Silently continue if rate limit check fails - it's not critical
            pass

    def _convert_user(self, github_user: NamedUser | None) -> GitHubUser | None:
        """Convert PyGitHub user to our model."""
        if github_user is None:
            return None
        return GitHubUser(login=github_user.login, id=github_user.id)

    def _convert_label(self, github_label: Label) -> GitHubLabel:
        """Convert PyGitHub label to our model."""
        return GitHubLabel(
            name=github_label.name,
            color=github_label.color,
            description=github_label.description,
        )

    def _convert_issue(self, github_issue: Issue) -> GitHubIssue:
        """Convert PyGitHub issue to our model.

        Comments are not fetched here; rules that need the last comment
        author resolve it lazily through ``get_last_comment_author``.
        """
        return GitHubIssue(
            number=github_issue.number,
            title=github_issue.title,
            body=github_issue.body,
            state=github_issue.state,
            is_pull_request=github_issue.pull_request is not None,
            labels=[self._convert_label(label) for label in github_issue.labels],
            comment_count=github_issue.comments,
            locked=github_issue.locked,
            user=self._convert_user(github_issue.user),
            html_url=github_issue.html_url,
            created_at=github_issue.created_at,
            updated_at=github_issue.updated_at,
            closed_at=github_issue.closed_at,
        )

    def _convert_release(self, github_release: GitRelease) -> GitHubRelease:
        """Convert PyGitHub release to our model."""
        return GitHubRelease(
            tag_name=github_release.tag_name,
            body=github_release.body,
            draft=github_release.draft,
            prerelease=github_release.prerelease,
        )

    def get_repository(self, org: str, repo: str) -> Repository:
        """Get repository object, cached per client."""
        slug = f"{org}/{repo}"
        if slug not in self._repositories:
            try:
                self._repositories[slug] = self.github.get_repo(slug)
            except UnknownObjectException:
                raise ValueError(f"Repository {org}/{repo} not found")
        return self._repositories[slug]

    def get_authenticated_login(self) -> str:
        """Login of the account the token belongs to."""
        return self.github.get_user().login

    def iter_issue_pages(
        self, org: str, repo: str, state: str = "all"
    ) -> Iterator[list[GitHubIssue]]:
        """Yield issues and pull requests one page at a time.

        Only the current page is held in memory. The issues endpoint is used
        for pull requests too because the pulls endpoint omits labels.
        """
        repository = self.get_repository(org, repo)
        paginated = repository.get_issues(state=state)

        page = 0
        while True:
            self._check_rate_limit()
            try:
                raw_page = paginated.get_page(page)
            except RateLimitExceededException:
                console.print("Rate limit exceeded while paging issues, waiting...")
                time.sleep(60)
                continue

            if not raw_page:
                return

            yield [self._convert_issue(issue) for issue in raw_page]

            if len(raw_page) < self.per_page:
                return
            page += 1

    def get_recent_releases(
        self, org: str, repo: str, limit: int = 5
    ) -> list[GitHubRelease]:
        """Get the ``limit`` most recent releases, newest first."""
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        releases = []
        for i, github_release in enumerate(repository.get_releases()):
            if i >= limit:
                break
            releases.append(self._convert_release(github_release))
        return releases

    def get_last_comment_author(
        self, org: str, repo: str, issue_number: int
    ) -> str | None:
        """Login of whoever wrote the most recent comment, if any.

        Jumps straight to the last page of comments instead of walking the
        whole thread.
        """
        self._check_rate_limit()

        try:
            github_issue = self.get_repository(org, repo).get_issue(issue_number)
            comments = github_issue.get_comments()
            total = comments.totalCount
            if total == 0:
                return None
            last_page = comments.get_page((total - 1) // self.per_page)
            if not last_page:
                return None
            return last_page[-1].user.login
        except UnknownObjectException:
            raise ValueError(f"Issue #{issue_number} not found in {org}/{repo}")
        except RateLimitExceededException:
            console.print("Rate limit exceeded during comment fetch, waiting...")
            time.sleep(60)
            return self.get_last_comment_author(org, repo, issue_number)

    def get_merged_at(self, org: str, repo: str, pr_number: int) -> datetime | None:
        """Merge timestamp of a pull request, None when closed unmerged."""
        self._check_rate_limit()

        try:
            pull = self.get_repository(org, repo).get_pull(pr_number)
            return pull.merged_at
        except UnknownObjectException:
            raise ValueError(f"Pull request #{pr_number} not found in {org}/{repo}")
        except RateLimitExceededException:
            console.print("Rate limit exceeded during pull request fetch, waiting...")
            time.sleep(60)
            return self.get_merged_at(org, repo, pr_number)

    def apply_action(
        self, org: str, repo: str, issue_number: int, action: TriageAction
    ) -> bool:
        """Apply one planned side effect to an issue or pull request.

        Returns:
            True if successful

        Raises:
            ValueError: If repository or issue not found, or the action is unknown
            Exception: For other API errors
        """
        self._check_rate_limit()

        try:
            github_issue = self.get_repository(org, repo).get_issue(issue_number)

            if action.kind == "add_comment":
                github_issue.create_comment(action.value or "")
            elif action.kind == "add_label":
                github_issue.add_to_labels(action.value)
            elif action.kind == "remove_label":
                github_issue.remove_from_labels(action.value)
            elif action.kind == "close":
                github_issue.edit(state="closed")
            elif action.kind == "reopen":
                github_issue.edit(state="open")
            elif action.kind == "lock":
                github_issue.lock(LOCK_REASON)
            elif action.kind == "delete_comment":
                if action.comment_id is None:
                    raise ValueError("delete_comment requires a comment id")
                github_issue.get_comment(action.comment_id).delete()
            else:
                raise ValueError(f"Unknown action kind: {action.kind}")

            console.print(f"#{issue_number}: {action.describe()}")
            return True

        except UnknownObjectException:
            raise ValueError(f"Issue #{issue_number} not found in {org}/{repo}")
        except RateLimitExceededException:
            console.print(f"Rate limit exceeded during {action.kind}, waiting...")
            time.sleep(60)
            return self.apply_action(org, repo, issue_number, action)
        except ValueError:
            raise
        except Exception as e:
            console.print(f"Error applying {action.kind} to #{issue_number}: {e}")
            raise
