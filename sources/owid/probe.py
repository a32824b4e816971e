"""Watch OWID's GitHub data repositories for new annual releases."""

from typing import ClassVar

from factgrid.domain.shared.error import ProbeError
from factgrid.domain.watchdog.rules import (
    first_applicable,
    mentioned_year,
    temporal_window_signal,
    unknown_year_signal,
    version_control_signal,
)
from factgrid.sdk import Detection, Probe, get_json, parse
from sources.owid.schema import Commit, CommitList

COMMITS_URL = "https://api.github.com/repos/owid/{repo}/commits"


class GitHubCommitProbe(Probe):
    """Reads the most recent commit touching one data file."""

    label = "GitHub API"
    repo: ClassVar[str]
    path: ClassVar[str]

    async def latest_commit(self) -> Commit:
        data = await get_json(
            self.client,
            COMMITS_URL.format(repo=self.repo),
            source="GitHub API",
            params={"path": self.path, "per_page": 1},
            headers={"Accept": "application/vnd.github.v3+json"},
        )
        commits = parse(CommitList, data, source="GitHub API").root
        if not commits:
            raise ProbeError(f"GitHub API: no commits found for {self.repo}/{self.path}")
        return commits[0]

    def judge(self, commit: Commit, previous_year: int | None) -> Detection:
        raise NotImplementedError

    async def detect(self, previous_year: int | None) -> Detection:
        commit = await self.latest_commit()
        detection = self.judge(commit, previous_year)
        committed = commit.commit.committer.date
        return Detection(
            changed=detection.changed,
            detected_year=detection.detected_year,
            method=f'GitHub commit: {committed:%Y-%m-%d} - "{commit.commit.message[:80]}"',
        )


class CO2EmissionsProbe(GitHubCommitProbe):
    """The Global Carbon Budget lands in November, so late-year commits count too."""

    slug = "co2-emissions"
    repo = "co2-data"
    path = "owid-co2-data.json"

    def judge(self, commit: Commit, previous_year: int | None) -> Detection:
        mentioned = mentioned_year(commit.commit.message)
        return first_applicable(
            version_control_signal(mentioned, previous_year),
            temporal_window_signal(commit.commit.committer.date, previous_year),
            previous=previous_year,
        )


class EnergyDataProbe(GitHubCommitProbe):
    repo = "energy-data"
    path = "owid-energy-data.csv"

    def judge(self, commit: Commit, previous_year: int | None) -> Detection:
        mentioned = mentioned_year(commit.commit.message)
        return first_applicable(
            version_control_signal(mentioned, previous_year),
            unknown_year_signal(mentioned, previous_year),
            previous=previous_year,
        )


class RenewableEnergyProbe(EnergyDataProbe):
    slug = "renewable-energy"


class EVAdoptionProbe(EnergyDataProbe):
    slug = "ev-adoption"
