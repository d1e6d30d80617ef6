"""Unit tests for the pull request body section upsert."""

import pytest

from nightly_link_bot.services.comment_upsert import (
    CommentUpsert,
    build_marker,
    compose_body,
    extract_commit_sha,
    split_at_marker,
)
from nightly_link_bot.services.exceptions import AlreadyUpToDate

MARKER = "\r\n<!-- DO NOT REMOVE!! -->\r\n<!-- bot: nightly-link -->\r\n"


class TestMarkerParsing:
    """Tests for locating the bot section in a body."""

    def test_build_marker(self):
        assert build_marker("nightly-link") == MARKER

    def test_replaces_existing_section(self):
        prior = "Hello\r\n<!-- DO NOT REMOVE!! -->\r\n<!-- bot: nightly-link -->\r\nOLD"

        body = compose_body(prior, "nightly-link", "NEW")

        assert body == "Hello\r\n<!-- DO NOT REMOVE!! -->\r\n<!-- bot: nightly-link -->\r\nNEW"

    def test_appends_when_marker_missing(self):
        prior = "Some description\n\nwith two paragraphs"

        body = compose_body(prior, "nightly-link", "NEW")

        assert body == prior + MARKER + "NEW"

    def test_none_body_appends_to_empty(self):
        assert compose_body(None, "nightly-link", "NEW") == MARKER + "NEW"

    def test_lf_only_marker_is_found(self):
        prior = "Hello\r\nworld\n<!-- DO NOT REMOVE!! -->\n<!-- bot: nightly-link -->\nOLD\nmore old"

        sections = split_at_marker(prior, "nightly-link")

        assert sections.marker_present
        assert sections.prefix == "Hello\r\nworld"
        assert sections.suffix == "OLD\nmore old"

    def test_mixed_line_endings_inside_marker(self):
        prior = "Intro\n<!-- DO NOT REMOVE!! -->\r\n<!-- bot: nightly-link -->\nOLD"

        body = compose_body(prior, "nightly-link", "NEW")

        assert body == "Intro" + MARKER + "NEW"

    def test_marker_at_start_of_body(self):
        prior = "<!-- DO NOT REMOVE!! -->\r\n<!-- bot: nightly-link -->\r\nOLD"

        sections = split_at_marker(prior, "nightly-link")

        assert sections.marker_present
        assert sections.prefix == ""

    def test_marker_at_end_of_body(self):
        prior = "Intro\r\n<!-- DO NOT REMOVE!! -->\r\n<!-- bot: nightly-link -->"

        sections = split_at_marker(prior, "nightly-link")

        assert sections.marker_present
        assert sections.prefix == "Intro"
        assert sections.suffix == ""

    def test_first_marker_wins_and_later_ones_are_discarded(self):
        prior = "A" + MARKER + "first" + MARKER + "second"

        assert compose_body(prior, "nightly-link", "NEW") == "A" + MARKER + "NEW"

    def test_other_purpose_is_not_matched(self):
        prior = "A" + build_marker("coverage") + "report"

        sections = split_at_marker(prior, "nightly-link")

        assert not sections.marker_present
        assert sections.prefix == prior

    def test_purpose_prefix_is_not_matched(self):
        prior = "A" + build_marker("nightly-link-extra") + "report"

        assert not split_at_marker(prior, "nightly-link").marker_present

    def test_purpose_with_regex_metacharacters(self):
        purpose = "build (x86+arm)*.[zip]"
        prior = "A" + build_marker(purpose) + "OLD"

        assert compose_body(prior, purpose, "NEW") == "A" + build_marker(purpose) + "NEW"

    def test_notice_inline_with_text_is_ignored(self):
        prior = "text <!-- DO NOT REMOVE!! -->\n<!-- bot: nightly-link -->\nOLD"

        sections = split_at_marker(prior, "nightly-link")

        assert not sections.marker_present


class TestCommitShaExtraction:
    """Tests for reading the embedded commit SHA."""

    def test_extracts_sha(self):
        assert extract_commit_sha("x\n<!-- commit-sha: abc123 -->\n## Download") == "abc123"

    def test_case_insensitive(self):
        assert extract_commit_sha("<!-- COMMIT-SHA: ABC123 -->") == "ABC123"

    def test_missing(self):
        assert extract_commit_sha("no marker here") is None
        assert extract_commit_sha(None) is None


class TestCommentUpsert:
    """Tests for writing the section back to GitHub."""

    @pytest.mark.asyncio
    async def test_upsert_writes_full_body(self, fake_github, repository):
        async with fake_github.client() as client:
            upserter = CommentUpsert(client, repository)
            await upserter.upsert(42, "nightly-link", "Hello", "NEW", head_sha="abc")

        assert len(fake_github.updates) == 1
        update = fake_github.updates[0]
        assert update["number"] == 42
        assert update["body"] == "Hello" + MARKER + "NEW"
        assert update["headers"]["X-GitHub-Api-Version"] == "2022-11-28"

    @pytest.mark.asyncio
    async def test_upsert_skips_write_when_up_to_date(self, fake_github, repository):
        prior = "Hello" + MARKER + "<!-- commit-sha: ABC123 -->\nold"

        async with fake_github.client() as client:
            upserter = CommentUpsert(client, repository)
            with pytest.raises(AlreadyUpToDate):
                await upserter.upsert(42, "nightly-link", prior, "NEW", head_sha="ABC123")

        assert fake_github.updates == []
        assert fake_github.requests == []

    @pytest.mark.asyncio
    async def test_upsert_rewrites_when_sha_changed(self, fake_github, repository):
        prior = "Hello" + MARKER + "<!-- commit-sha: abc123 -->\nold"

        async with fake_github.client() as client:
            upserter = CommentUpsert(client, repository)
            await upserter.upsert(42, "nightly-link", prior, "NEW", head_sha="def456")

        assert fake_github.updates[0]["body"] == "Hello" + MARKER + "NEW"
