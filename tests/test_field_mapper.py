"""Tests for the CSV <-> JSON field mapping."""

import logging

import pytest

from career_data.csv_parser import parse_csv
from career_data.data_structures import CareerPath, Node
from career_data.field_mapper import (node_to_row, path_to_row, row_to_node,
                                      row_to_path, split_requirements,
                                      table_to_nodes, table_to_paths)


class TestSplitRequirements:

    @pytest.mark.parametrize("cell,expected", [
        ("A;B;C", ["A", "B", "C"]),
        (" A ; B ", ["A", "B"]),
        ("A;;B;", ["A", "B"]),
        ("", []),
        (None, []),
        (" ; ", []),
    ])
    def test_split(self, cell, expected):
        assert split_requirements(cell) == expected


class TestExportDirection:

    def test_node_row_narrowed_to_csv_columns(self, sample_nodes):
        row = node_to_row(Node.from_dict(sample_nodes[0]))
        assert list(row) == ['id', 'label', 'department', 'level',
                             'salary', 'description', 'requirements']
        assert row['requirements'] == ["Diploma Zorgassistent", "BHV"]
        assert 'Care/non care' not in row

    def test_semicolon_in_requirement_is_flagged(self, caplog):
        node = Node(id="n1", requirements=["A", "B;C"])
        with caplog.at_level(logging.WARNING, logger="career_data"):
            row = node_to_row(node)
        assert row['requirements'] == ["A", "B;C"]
        assert "'B;C'" in caplog.text

    def test_path_row(self):
        row = path_to_row(CareerPath("a", "b", "2-4 years"))
        assert row == {"from": "a", "to": "b", "timeframe": "2-4 years"}

    def test_path_without_timeframe(self):
        row = path_to_row(CareerPath.from_dict({"from": "a", "to": "b"}))
        assert row["timeframe"] is None


class TestImportDirection:

    def test_row_to_node(self):
        node = row_to_node({
            "id": "n1", "label": "Nurse", "department": "Care", "level": "MBO",
            "salary": "3000", "description": "d", "requirements": " A ;B;; ",
        })
        assert node.requirements == ["A", "B"]
        assert node.salary == "3000"
        assert list(node.to_dict()) == ['id', 'label', 'department', 'level',
                                        'description', 'requirements', 'salary']

    def test_row_to_path_keeps_strings(self):
        path = row_to_path({"from": "a", "to": "b", "timeframe": ""}, row_number=5)
        assert path.to_dict() == {"from": "a", "to": "b", "timeframe": ""}
        assert path.row == 5

    def test_table_to_paths_carries_row_numbers(self):
        table = parse_csv("from,to,timeframe\na,b,1\n\nc,d,2")
        assert [p.row for p in table_to_paths(table)] == [2, 3]

    def test_table_to_nodes_carries_row_numbers(self):
        table = parse_csv("id,label\na,A\nb,B,extra\nc,C")
        assert [(n.id, n.row) for n in table_to_nodes(table)] == [("a", 2), ("c", 4)]
        assert "row" not in table_to_nodes(table)[0].to_dict()

    def test_requirements_inverse_up_to_whitespace(self):
        node = Node(id="n1", requirements=["  BIG ", "BHV", ""])
        exported = node_to_row(node)["requirements"]
        reimported = split_requirements(";".join(exported))
        assert reimported == ["BIG", "BHV"]
