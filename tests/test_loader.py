"""Tests for the runtime data loader (HTTP session mocked)."""

from unittest.mock import MagicMock

import pytest
import requests

from career_data.loader import (CareerDataLoader, CareerDataLoaderError,
                                cache_busting_params, remap_node_keys)


def make_response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def session(sample_nodes, sample_paths):
    mock_session = MagicMock()

    def get(url, params=None, timeout=None):
        if url.endswith("career-nodes.json"):
            return make_response({"nodes": sample_nodes})
        return make_response({"paths": sample_paths})

    mock_session.get.side_effect = get
    return mock_session


class TestRemapNodeKeys:

    def test_dutch_keys_are_mirrored(self):
        node = {
            "id": "n1",
            "Care/non care": "Care",
            "Care cluster": "Acute zorg",
            "Link naar PIO werkenbij (ter bespreking)": "https://example.org/n1",
        }
        remapped = remap_node_keys(node)
        assert remapped["careNonCare"] == "Care"
        assert remapped["careCluster"] == "Acute zorg"
        assert remapped["pioLink"] == "https://example.org/n1"
        assert remapped["Care cluster"] == "Acute zorg"
        assert "careNonCare" not in node

    def test_missing_source_keys_map_to_none(self):
        remapped = remap_node_keys({"id": "n1"})
        assert remapped["careNonCare"] is None
        assert remapped["pioLink"] is None


class TestCareerDataLoader:

    def test_cache_busting_params(self):
        assert cache_busting_params(1700000000.123) == {"v": "1700000000123"}

    def test_load_fetches_both_files_with_same_timestamp(self, session):
        loader = CareerDataLoader("https://careers.example.org/assets/data/",
                                  timeout=5, session=session)
        documents = loader.load_documents(now=1700000000.0)

        urls = [call.args[0] for call in session.get.call_args_list]
        assert urls == ["https://careers.example.org/assets/data/career-nodes.json",
                        "https://careers.example.org/assets/data/career-paths.json"]
        params = [call.kwargs["params"] for call in session.get.call_args_list]
        assert params == [{"v": "1700000000000"}, {"v": "1700000000000"}]
        assert all(call.kwargs["timeout"] == 5 for call in session.get.call_args_list)
        assert documents["nodes"][0]["careNonCare"] == "Care"
        assert len(documents["paths"]) == 3

    def test_load_returns_dataset(self, session):
        dataset = CareerDataLoader("http://localhost/data", session=session).load()
        assert [n.id for n in dataset.nodes] == ["zorgassistent", "verpleegkundige", "teamleider"]
        assert dataset.nodes[1].extra["careCluster"] == "Verpleging & verzorging"
        assert dataset.paths[0].source == "zorgassistent"

    def test_timeout_raises_loader_error(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(CareerDataLoaderError, match="timed out"):
            CareerDataLoader("http://localhost/data", session=session).load()

    def test_http_error_raises_loader_error(self):
        resp = MagicMock()
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Client Error")
        session = MagicMock()
        session.get.return_value = resp
        with pytest.raises(CareerDataLoaderError, match="HTTP error"):
            CareerDataLoader("http://localhost/data", session=session).load()

    def test_unexpected_document_shape(self):
        session = MagicMock()
        session.get.return_value = make_response({"items": []})
        with pytest.raises(CareerDataLoaderError, match="'nodes'"):
            CareerDataLoader("http://localhost/data", session=session).load()

    def test_relative_base_url_is_a_request_error(self):
        # A plain Session rejects URLs without a scheme before any I/O
        loader = CareerDataLoader("assets/data", session=requests.Session())
        with pytest.raises(CareerDataLoaderError, match="failed"):
            loader.load()

    def test_other_request_errors_are_wrapped(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.TooManyRedirects("Exceeded 30 redirects")
        with pytest.raises(CareerDataLoaderError, match="failed"):
            CareerDataLoader("http://localhost/data", session=session).load()

    def test_invalid_json_raises_loader_error(self):
        resp = MagicMock()
        resp.raise_for_status.return_value = None
        resp.json.side_effect = ValueError("Expecting value")
        session = MagicMock()
        session.get.return_value = resp
        with pytest.raises(CareerDataLoaderError, match="Invalid JSON"):
            CareerDataLoader("http://localhost/data", session=session).load()
