"""End-to-end tests against real temporary git repositories."""

import os
import re
import sys

import pytest

from gitversion_core import GitAccessError, UNSPECIFIED_VERSION, VersionResolver, git_version, version_details
from gitversion_core.config import CONFIG_ENV_VAR, CONFIG_FILENAME, DescribeOptions, GitVersionConfig
from gitversion_core.vcs import DescribeHint, GitAdapter


def test_fresh_repository_has_no_version(git_repo):
    resolver = VersionResolver.for_directory(git_repo.root)
    assert resolver.git_version() == UNSPECIFIED_VERSION
    assert resolver.version_details() is None


def test_commits_without_tags(git_repo):
    git_repo.commit("a.txt")
    resolver = VersionResolver.for_directory(git_repo.root)
    assert resolver.git_version() == UNSPECIFIED_VERSION


def test_distance_from_tag(git_repo):
    git_repo.commit("a.txt")
    git_repo.tag("v1.2.0")
    git_repo.commit("b.txt")
    head = git_repo.commit("c.txt")

    resolver = VersionResolver.for_directory(git_repo.root)
    assert re.fullmatch(r"v1\.2\.0-2-g[0-9a-f]{4,}", resolver.git_version())

    details = resolver.version_details()
    assert details.tag_name == "v1.2.0"
    assert details.commit_count == 2
    assert details.git_hash == head[:10]


def test_exactly_at_tag_with_modified_tree(git_repo):
    head = git_repo.commit("a.txt")
    git_repo.tag("release-7")
    (git_repo.root / "a.txt").write_text("changed", encoding="utf-8")

    resolver = VersionResolver.for_directory(git_repo.root)
    assert resolver.git_version() == "release-7.dirty"
    details = resolver.version_details()
    assert details.tag_name == "release-7"
    assert details.commit_count == 0
    assert details.git_hash == head[:10]


def test_untracked_file_makes_tree_dirty(git_repo):
    git_repo.commit("a.txt")
    git_repo.tag("v0.1.0")
    (git_repo.root / "new.txt").write_text("x", encoding="utf-8")
    assert VersionResolver.for_directory(git_repo.root).git_version() == "v0.1.0.dirty"


def test_lightweight_tags_need_tags_option(git_repo):
    git_repo.commit("a.txt")
    git_repo.git("tag", "v0.2.0")

    assert VersionResolver.for_directory(git_repo.root).git_version() == UNSPECIFIED_VERSION

    config = GitVersionConfig(describe=DescribeOptions(tags=True))
    assert VersionResolver.for_directory(git_repo.root, config=config).git_version() == "v0.2.0"


def test_resolves_from_subdirectory(git_repo):
    git_repo.commit("a.txt")
    git_repo.tag("v1.0.0")
    sub = git_repo.root / "pkg" / "mod"
    sub.mkdir(parents=True)

    from_sub = VersionResolver.for_directory(sub)
    from_root = VersionResolver.for_directory(git_repo.root)
    assert from_sub.git_version() == from_root.git_version() == "v1.0.0"
    assert from_sub.version_details() == from_root.version_details()


def test_adapter_reports_no_match_as_none(git_repo):
    git_repo.commit("a.txt")
    assert GitAdapter(git_repo.root).describe() is None


def test_adapter_always_hint_falls_back_to_hash(git_repo):
    head = git_repo.commit("a.txt")
    described = GitAdapter(git_repo.root).describe(DescribeHint(always=True))
    assert head.startswith(described)


def test_adapter_unborn_head_raises(git_repo):
    with pytest.raises(GitAccessError):
        GitAdapter(git_repo.root).resolve_head()


def test_adapter_missing_executable(git_repo):
    adapter = GitAdapter(git_repo.root, git_executable="git-binary-that-does-not-exist")
    with pytest.raises(GitAccessError, match="not found"):
        adapter.is_clean()


def test_abbreviate_validates_input(tmp_path):
    adapter = GitAdapter(tmp_path)
    assert adapter.abbreviate("0123456789abcdef", 10) == "0123456789"
    with pytest.raises(GitAccessError):
        adapter.abbreviate("not-a-hash", 10)
    with pytest.raises(GitAccessError):
        adapter.abbreviate("abcdef", 0)


@pytest.mark.skipif(sys.platform == "win32", reason="needs byte-transparent argv")
def test_non_utf8_tag_name_does_not_raise(git_repo):
    head = git_repo.commit("a.txt")
    git_repo.tag(os.fsdecode(b"v\xff1"))

    resolver = VersionResolver.for_directory(git_repo.root)
    assert resolver.git_version() == "v\ufffd1"
    details = resolver.version_details()
    assert details.tag_name == "v\ufffd1"
    assert details.git_hash == head[:10]


def test_module_api_reads_project_config(git_repo, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    (git_repo.root / CONFIG_FILENAME).write_text("[describe]\ntags = true\n", encoding="utf-8")
    git_repo.git("add", CONFIG_FILENAME)
    git_repo.git("commit", "-q", "-m", "add config")
    git_repo.git("tag", "v0.2.0")

    assert git_version(git_repo.root) == "v0.2.0"
    assert version_details(git_repo.root).tag_name == "v0.2.0"
