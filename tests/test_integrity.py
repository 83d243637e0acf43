"""Tests for the advisory referential integrity checks."""

import logging

from career_data.csv_parser import parse_csv
from career_data.data_structures import CareerPath, Node
from career_data.field_mapper import table_to_nodes
from career_data.integrity import check_node_identifiers, check_path_references


class TestPathReferences:

    def test_valid_paths_have_no_issues(self):
        paths = [CareerPath("a", "b"), CareerPath("b", "b")]
        assert check_path_references(paths, {"a", "b"}) == []

    def test_ghost_from_gives_exactly_one_issue(self, caplog):
        paths = [CareerPath("a", "b"), CareerPath("ghost-id", "b")]
        with caplog.at_level(logging.WARNING, logger="career_data"):
            issues = check_path_references(paths, {"a", "b"})

        assert len(issues) == 1
        issue = issues[0]
        assert (issue.row, issue.field, issue.value) == (3, "from", "ghost-id")
        assert "Row 3" in issue.message
        assert "'from'" in issue.message
        assert "ghost-id" in issue.message
        assert caplog.text.count("ghost-id") == 1

    def test_both_endpoints_missing(self):
        issues = check_path_references([CareerPath("x", "y")], set())
        assert [(i.field, i.value) for i in issues] == [("from", "x"), ("to", "y")]

    def test_source_row_number_preferred(self):
        issues = check_path_references([CareerPath("a", "zzz", row=7)], {"a"}, log=False)
        assert issues[0].row == 7

    def test_paths_are_not_modified(self):
        paths = [CareerPath("ghost", "a")]
        check_path_references(paths, {"a"}, log=False)
        assert paths == [CareerPath("ghost", "a")]


class TestNodeIdentifiers:

    def test_unique_ids(self):
        assert check_node_identifiers([Node("a"), Node("b")]) == []

    def test_duplicate_reported_once_at_second_occurrence(self):
        issues = check_node_identifiers([Node("a"), Node("b"), Node("a"), Node("a")], log=False)
        assert len(issues) == 1
        assert (issues[0].kind, issues[0].value, issues[0].row) == ("duplicate_id", "a", 4)

    def test_empty_id(self):
        issues = check_node_identifiers([Node(""), Node("  ")], log=False)
        assert [i.kind for i in issues] == ["empty_id", "empty_id"]

    def test_duplicate_row_uses_source_record_number(self):
        table = parse_csv("id,label\na,A\nb,B,extra\nc,C\na,Again")
        issues = check_node_identifiers(table_to_nodes(table), log=False)
        assert [(i.kind, i.row) for i in issues] == [("duplicate_id", 5)]
        assert issues[0].message == 'Warning [Row 5]: Node ID "a" is not unique.'
