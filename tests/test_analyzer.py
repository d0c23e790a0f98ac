"""Tests for forktrack_core.branches — divergence analysis and classification."""

from __future__ import annotations

import pytest

from conftest import script_branch
from forktrack_core.branches import (
    BranchAnalyzer,
    BranchState,
    classify,
    collect_statuses,
    match_branch,
    short_hash,
)
from forktrack_core.errors import NotARepository

MAIN_SHA = "a1b2c3d4e5f6a7b8c9d0a1b2c3d4e5f6a7b8c9d0"
UP_SHA = "0f9e8d7c6b5a0f9e8d7c6b5a0f9e8d7c6b5a0f9e"
BRANCHES = ["branch", "--format=%(refname:short)"]


def _script_repo(fake, branches, repo=None, head="origin/main"):
    fake.script(["fetch", "upstream", "--quiet"], repo=repo)
    if head is not None:
        fake.script(["rev-parse", "--abbrev-ref", "origin/HEAD"], stdout=head + "\n", repo=repo)
    fake.script(BRANCHES, stdout="".join(b + "\n" for b in branches), repo=repo)


# ── classify ───────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "ahead, behind, expected",
    [
        (0, 0, BranchState.synced),
        (3, 0, BranchState.ahead),
        (0, 5, BranchState.behind),
        (2, 3, BranchState.diverged),
    ],
)
def test_classify(ahead, behind, expected):
    assert classify(ahead, behind) is expected


def test_classify_rejects_negative():
    with pytest.raises(ValueError):
        classify(-1, 0)


def test_state_labels():
    assert BranchState.ahead.label == "⬆ Ahead"
    assert BranchState.no_remote_branch.label == "⚠ No remote branch"


# ── match_branch ───────────────────────────────────────────────────


class TestMatchBranch:
    def test_star_matches_everything(self):
        assert match_branch("anything/at/all", "*")

    @pytest.mark.parametrize("name", ["feature/login", "feature/"])
    def test_prefix_glob_matches(self, name):
        assert match_branch(name, "feature/*")

    @pytest.mark.parametrize("name", ["hotfix/login", "features/x"])
    def test_prefix_glob_rejects(self, name):
        assert not match_branch(name, "feature/*")

    def test_regex_metacharacters_are_literal(self):
        assert match_branch("release-1.0", "release-1.0")
        assert not match_branch("release-1x0", "release-1.0")
        assert match_branch("v1.2+build", "v1.2+*")

    def test_anchored_at_both_ends(self):
        assert not match_branch("my-main", "main")
        assert not match_branch("main-old", "main")
        assert match_branch("main", "main")


def test_short_hash():
    assert short_hash(MAIN_SHA) == "a1b2c3d"
    assert short_hash("abc") == "abc"


# ── BranchAnalyzer ─────────────────────────────────────────────────


class TestAnalyzer:
    def test_not_a_repository(self, fake_git, tmp_path):
        (tmp_path / "plain").mkdir()
        with pytest.raises(NotARepository):
            BranchAnalyzer(fake_git).analyze(tmp_path / "plain")
        assert fake_git.calls == []

    def test_ahead_of_tracking_branch(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["main"])
        script_branch(fake_git, "main", MAIN_SHA, "upstream/main", UP_SHA, behind=0, ahead=3)

        [record] = BranchAnalyzer(fake_git).analyze(repo)

        assert record.repository == "lib"
        assert record.branch == "main"
        assert record.remote == "upstream"
        assert record.remote_ref == "upstream/main"
        assert (record.ahead, record.behind) == (3, 0)
        assert record.status is BranchState.ahead
        assert record.local_hash == "a1b2c3d"
        assert record.remote_hash == "0f9e8d7"
        assert record.is_default is True
        assert record.tracking_ok is True

    def test_rev_list_direction(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["main"])
        script_branch(fake_git, "main", MAIN_SHA, "upstream/main", UP_SHA, behind=4, ahead=1)

        [record] = BranchAnalyzer(fake_git).analyze(repo)

        assert ("rev-list", "--count", "--left-right", "upstream/main...main") in fake_git.commands()
        assert (record.behind, record.ahead) == (4, 1)
        assert record.status is BranchState.diverged

    def test_no_tracking_and_no_remote_branch(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["topic"])
        fake_git.script(["rev-parse", "topic"], stdout=MAIN_SHA)

        records = BranchAnalyzer(fake_git).analyze(repo)

        assert len(records) == 1
        record = records[0]
        assert record.status is BranchState.no_remote_branch
        assert (record.ahead, record.behind) == (0, 0)
        assert record.tracking_ok is False
        assert record.remote_ref == "N/A"
        assert record.remote_hash == "N/A"
        assert record.local_hash == "a1b2c3d"

    def test_placeholder_tracking_falls_back_to_remote_branch(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["dev"])
        fake_git.script(["rev-parse", "dev"], stdout=MAIN_SHA)
        fake_git.script(["rev-parse", "--abbrev-ref", "dev@{u}"], stdout="dev@{u}\n")
        fake_git.script(["rev-parse", "--verify", "upstream/dev"], stdout=UP_SHA)
        fake_git.script(["rev-parse", "upstream/dev"], stdout=UP_SHA)
        fake_git.script(
            ["rev-list", "--count", "--left-right", "upstream/dev...dev"], stdout="0\t0"
        )

        [record] = BranchAnalyzer(fake_git).analyze(repo)

        assert record.remote_ref == "upstream/dev"
        assert record.status is BranchState.synced
        assert record.tracking_ok is True
        assert record.is_default is False

    def test_remote_inaccessible(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["main"])
        script_branch(fake_git, "main", MAIN_SHA, "upstream/main", None)

        [record] = BranchAnalyzer(fake_git).analyze(repo)

        assert record.status is BranchState.remote_inaccessible
        assert record.remote_ref == "upstream/main"
        assert record.remote_hash == "N/A"
        assert record.tracking_ok is False

    def test_unresolvable_branch_is_skipped(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["ghost", "main"])
        script_branch(fake_git, "main", MAIN_SHA, "upstream/main", UP_SHA)

        records = BranchAnalyzer(fake_git).analyze(repo)

        assert [r.branch for r in records] == ["main"]

    def test_undecodable_branch_name_does_not_hide_others(self, fake_git, make_repo):
        repo = make_repo("lib")
        # Runner output after lenient decoding of a latin-1 refname
        _script_repo(fake_git, ["caf�", "main"])
        script_branch(fake_git, "main", MAIN_SHA, "upstream/main", UP_SHA)

        records = BranchAnalyzer(fake_git).analyze(repo)

        assert [r.branch for r in records] == ["main"]

    def test_unparseable_counts_degrade_to_synced(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["main"])
        script_branch(fake_git, "main", MAIN_SHA, "upstream/main", UP_SHA)
        fake_git.script(
            ["rev-list", "--count", "--left-right", "upstream/main...main"], stdout="oops"
        )

        [record] = BranchAnalyzer(fake_git).analyze(repo)

        assert record.status is BranchState.synced
        assert record.tracking_ok is True

    def test_short_commit_ids_not_padded(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["main"])
        script_branch(fake_git, "main", "abc", "upstream/main", "de")

        [record] = BranchAnalyzer(fake_git).analyze(repo)

        assert record.local_hash == "abc"
        assert record.remote_hash == "de"

    def test_fetch_failure_does_not_abort(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["main"])
        fake_git.script(["fetch", "upstream", "--quiet"], exit_code=1, stderr="could not resolve host")
        script_branch(fake_git, "main", MAIN_SHA, "upstream/main", UP_SHA, behind=2)

        [record] = BranchAnalyzer(fake_git).analyze(repo)

        assert record.status is BranchState.behind

    def test_no_default_branch(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["main"], head=None)
        script_branch(fake_git, "main", MAIN_SHA, "upstream/main", UP_SHA)

        [record] = BranchAnalyzer(fake_git).analyze(repo)

        assert record.is_default is False

    def test_pattern_filters_before_any_branch_query(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["main", "feature/login", "hotfix/login"])
        script_branch(fake_git, "feature/login", MAIN_SHA, "upstream/feature/login", UP_SHA)

        records = BranchAnalyzer(fake_git, pattern="feature/*").analyze(repo)

        assert [r.branch for r in records] == ["feature/login"]
        assert ("rev-parse", "main") not in fake_git.commands()
        assert ("rev-parse", "hotfix/login") not in fake_git.commands()

    def test_preserves_enumeration_order(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["zeta", "alpha", "mid"])
        for b in ["zeta", "alpha", "mid"]:
            script_branch(fake_git, b, MAIN_SHA, f"upstream/{b}", UP_SHA)

        records = BranchAnalyzer(fake_git).analyze(repo)

        assert [r.branch for r in records] == ["zeta", "alpha", "mid"]

    def test_custom_remote_and_head_remote(self, fake_git, make_repo):
        repo = make_repo("lib")
        fake_git.script(["fetch", "fork", "--quiet"])
        fake_git.script(["rev-parse", "--abbrev-ref", "mirror/HEAD"], stdout="mirror/trunk\n")
        fake_git.script(BRANCHES, stdout="trunk\n")
        script_branch(fake_git, "trunk", MAIN_SHA, "fork/trunk", UP_SHA)

        [record] = BranchAnalyzer(fake_git, remote="fork", head_remote="mirror").analyze(repo)

        assert record.remote == "fork"
        assert record.is_default is True


# ── collect_statuses ───────────────────────────────────────────────


class TestCollectStatuses:
    @pytest.fixture
    def two_repos(self, fake_git, make_repo):
        repos = [make_repo("beta"), make_repo("alpha")]
        for name in ("beta", "alpha"):
            _script_repo(fake_git, ["main"], repo=name)
            script_branch(fake_git, "main", MAIN_SHA, "upstream/main", UP_SHA, repo=name)
        return repos

    def test_keeps_target_order(self, fake_git, two_repos):
        collection = collect_statuses(two_repos, BranchAnalyzer(fake_git))
        assert [r.repository for r in collection.records] == ["beta", "alpha"]
        assert collection.all_tracked

    def test_parallel_keeps_target_order(self, fake_git, two_repos):
        collection = collect_statuses(two_repos, BranchAnalyzer(fake_git), max_workers=4)
        assert [r.repository for r in collection.records] == ["beta", "alpha"]

    def test_not_a_repository_does_not_stop_others(self, fake_git, two_repos, tmp_path):
        (tmp_path / "plain").mkdir()
        targets = [tmp_path / "plain", *two_repos]
        seen = []

        collection = collect_statuses(targets, BranchAnalyzer(fake_git), on_target=seen.append)

        assert collection.failed_targets == [tmp_path / "plain"]
        assert len(collection.records) == 2
        assert seen == targets

    def test_untracked_record_clears_all_tracked(self, fake_git, make_repo):
        repo = make_repo("lib")
        _script_repo(fake_git, ["orphan"])
        fake_git.script(["rev-parse", "orphan"], stdout=MAIN_SHA)
        collection = collect_statuses([repo], BranchAnalyzer(fake_git))
        assert not collection.all_tracked
