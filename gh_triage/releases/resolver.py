"""Map pull request numbers to the release that shipped them."""

import logging

from ..github_client.models import GitHubRelease
from ..mining.patterns import find_pr_references

logger = logging.getLogger(__name__)


def qualifying_releases(releases: list[GitHubRelease]) -> list[GitHubRelease]:
    """Published, non-prerelease releases with a tag and release notes."""
    return [
        release
        for release in releases
        if not release.draft
        and not release.prerelease
        and release.body
        and release.tag_name
    ]


def collect_pr_references(
    release: GitHubRelease, prs_to_releases: dict[int, str]
) -> None:
    """Record every PR referenced in the release notes under its tag."""
    if not release.body or not release.tag_name:
        return

    for line in release.body.splitlines():
        for reference in find_pr_references(line):
            prs_to_releases[reference.number] = release.tag_name


def map_prs_to_releases(releases: list[GitHubRelease]) -> dict[int, str]:
    """Build a PR number -> release tag lookup from release notes.

    Releases are processed in the given order and a PR mentioned by more than
    one release maps to the last one processed. For example:

        {8594: "2.22.0", 8592: "2.22.0", 8593: "2.21.0", 8564: "2.20.0"}
    """
    prs_to_releases: dict[int, str] = {}
    for release in qualifying_releases(releases):
        collect_pr_references(release, prs_to_releases)

    logger.info(
        f"Found {len(prs_to_releases)} PR references in {len(releases)} releases"
    )
    return prs_to_releases
