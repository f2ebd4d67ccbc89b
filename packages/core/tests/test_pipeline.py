"""Tests for the patch -> row -> bucket pipeline."""

import logging

from patchboard_core.grid import BucketGrid
from patchboard_core.models import Patch
from patchboard_core.pipeline import populate, process_patch


def _change(number, verified=(1,), code_review=(("alice", 1), ("bob", 0)), wip=False):
    labels = {}
    if verified is not None:
        labels["Verified"] = {"all": [{"name": "jenkins", "value": v} for v in verified]}
    if code_review is not None:
        labels["Code-Review"] = {"all": [{"name": n, "value": v} if v is not None else {"name": n} for n, v in code_review]}
    return {
        "_number": number,
        "subject": f"Change {number}",
        "owner": {"name": "Owner"},
        "project": "proj",
        "work_in_progress": wip,
        "labels": labels,
    }


class TestProcessPatch:
    def test_row_appended_to_expected_cell(self):
        grid = BucketGrid()
        row = process_patch(Patch.from_dict(_change(1)), grid, gerrit_url="https://r.example.org")
        assert grid.cell(2, 3) == [row]
        assert "class='VerifiedWith1'" in row
        assert "alice(+1); bob(0)" in row

    def test_wip_row_goes_to_wip(self):
        grid = BucketGrid()
        row = process_patch(Patch.from_dict(_change(2, wip=True)), grid)
        assert grid.wip == [row]
        assert "class='WIP'" in row

    def test_missing_review_value_contained(self, caplog):
        grid = BucketGrid()
        change = _change(3, code_review=(("alice", 2), ("bob", None)))
        with caplog.at_level(logging.WARNING):
            row = process_patch(Patch.from_dict(change), grid)
        assert grid.cell(2, 5) == [row]
        assert "class='INVALID'" in row
        assert "has no value" in caplog.text

    def test_custom_automation_account(self):
        grid = BucketGrid()
        change = _change(4, code_review=(("ci-bot", 1), ("alice", 0)))
        row = process_patch(Patch.from_dict(change), grid, automation_account="ci-bot")
        assert "ci-bot" not in row
        assert "alice(0)" in row


class TestPopulate:
    def test_each_patch_lands_exactly_once(self):
        changes = [
            _change(1),
            _change(2, verified=(0,)),
            _change(3, verified=(-1,), code_review=(("a", -2),)),
            _change(4, verified=None, code_review=None),
            _change(5, wip=True),
            _change(6, verified=(1,), code_review=(("a", 2), ("b", 0))),
            _change(7, code_review=(("a", None),)),
        ]
        grid = BucketGrid()
        assert populate(changes, grid) == len(changes)
        assert grid.total() == len(changes)

    def test_resets_grid_first(self):
        grid = BucketGrid()
        populate([_change(1), _change(2)], grid)
        populate([_change(3)], grid)
        assert grid.total() == 1

    def test_unparseable_record_skipped(self, caplog):
        grid = BucketGrid()
        with caplog.at_level(logging.WARNING):
            count = populate([{"subject": "no number"}, _change(1)], grid)
        assert count == 1
        assert grid.total() == 1
        assert "Skipping unparseable" in caplog.text

    def test_malformed_owner_skipped(self, caplog):
        bad_owner = _change(2)
        bad_owner["owner"] = "bob"
        grid = BucketGrid()
        with caplog.at_level(logging.WARNING):
            count = populate([_change(1), bad_owner, _change(3)], grid)
        assert count == 2
        assert grid.total() == 2
        assert "malformed owner" in caplog.text

    def test_non_text_fields_skipped(self):
        bad_subject = _change(2)
        bad_subject["subject"] = ["not", "text"]
        bad_project = _change(3)
        bad_project["project"] = 7
        grid = BucketGrid()
        assert populate([_change(1), bad_subject, bad_project], grid) == 1

    def test_accepts_parsed_patches(self):
        grid = BucketGrid()
        assert populate([Patch.from_dict(_change(1))], grid) == 1
