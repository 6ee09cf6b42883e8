"""
Tests for specification loading from files and URLs.

Covers:
- File loading and file errors
- URL validation and HTTP failures with a mocked requests.get
- Source selection in load_json
- Specification parsing errors
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from tfcodegen import utils
from tfcodegen.utils import (
    JSONLoaderError,
    load_json,
    load_json_from_file,
    load_json_from_url,
    load_specification,
)


def _response(data=None, status_code=200, content_type="application/json"):
    response = MagicMock()
    response.status_code = status_code
    response.headers = {"content-type": content_type}
    response.json.return_value = data
    return response


@pytest.fixture
def mock_get(monkeypatch):
    """Replace requests.get inside the loader module."""
    get = MagicMock()
    monkeypatch.setattr(utils.requests, "get", get)
    return get


class TestLoadJsonFromFile:
    """Tests for load_json_from_file."""

    def test_load(self, spec_file, spec_document):
        """The document and its path are returned."""
        source, data = load_json_from_file(spec_file)
        assert source == str(spec_file)
        assert data == spec_document

    def test_missing(self, tmp_path):
        """Missing files raise JSONLoaderError."""
        with pytest.raises(JSONLoaderError, match="File not found"):
            load_json_from_file(tmp_path / "missing.json")

    def test_directory(self, tmp_path):
        """Directories are not files."""
        with pytest.raises(JSONLoaderError, match="File not found"):
            load_json_from_file(tmp_path)

    def test_invalid_json(self, tmp_path):
        """Malformed JSON raises JSONLoaderError."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(JSONLoaderError, match="Invalid JSON"):
            load_json_from_file(path)

    def test_other_suffix(self, tmp_path):
        """Files without a .json suffix still load."""
        path = tmp_path / "spec.txt"
        path.write_text(json.dumps({"resources": []}), encoding="utf-8")
        assert load_json_from_file(path)[1] == {"resources": []}


class TestLoadJsonFromUrl:
    """Tests for load_json_from_url."""

    def test_load(self, mock_get):
        """The response body is decoded."""
        mock_get.return_value = _response({"resources": []})
        source, data = load_json_from_url("https://example.com/spec.json", timeout=5)
        assert source == "https://example.com/spec.json"
        assert data == {"resources": []}
        mock_get.assert_called_once_with("https://example.com/spec.json", timeout=5)

    @pytest.mark.parametrize("url", ["ftp://example.com/spec.json", "not a url", "https://"])
    def test_invalid_url(self, mock_get, url):
        """Only absolute http(s) URLs are fetched."""
        with pytest.raises(JSONLoaderError, match="Invalid URL"):
            load_json_from_url(url)
        mock_get.assert_not_called()

    def test_timeout(self, mock_get):
        """Timeouts raise JSONLoaderError."""
        mock_get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(JSONLoaderError, match="Request timeout"):
            load_json_from_url("https://example.com/spec.json")

    def test_connection_error(self, mock_get):
        """Connection failures raise JSONLoaderError."""
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(JSONLoaderError, match="Connection error"):
            load_json_from_url("https://example.com/spec.json")

    def test_http_error(self, mock_get):
        """Error status codes are reported."""
        response = _response(status_code=404)
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
        mock_get.return_value = response
        with pytest.raises(JSONLoaderError, match="HTTP error 404"):
            load_json_from_url("https://example.com/spec.json")

    def test_invalid_json(self, mock_get):
        """Undecodable bodies raise JSONLoaderError."""
        response = _response(content_type="text/html")
        response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        mock_get.return_value = response
        with pytest.raises(JSONLoaderError, match="Invalid JSON response"):
            load_json_from_url("https://example.com/spec")


class TestLoadJson:
    """Tests for load_json source selection."""

    def test_no_source(self):
        """One source is required."""
        with pytest.raises(JSONLoaderError, match="Either file_path or url"):
            load_json()

    def test_both_sources(self, spec_file):
        """Only one source may be given."""
        with pytest.raises(JSONLoaderError, match="Cannot specify both"):
            load_json(file_path=spec_file, url="https://example.com/spec.json")

    def test_url(self, mock_get):
        """URLs are fetched with the given timeout."""
        mock_get.return_value = _response({})
        load_json(url="https://example.com/spec.json", timeout=7)
        mock_get.assert_called_once_with("https://example.com/spec.json", timeout=7)


class TestLoadSpecification:
    """Tests for load_specification."""

    def test_load(self, spec_file):
        """Files are parsed into a specification."""
        _, specification = load_specification(file_path=spec_file)
        assert [r.name for r in specification.resources] == ["thing"]
        assert [d.name for d in specification.datasources] == ["thing"]

    def test_invalid_specification(self, tmp_path):
        """Structural errors are reported as JSONLoaderError."""
        path = tmp_path / "spec.json"
        path.write_text(json.dumps({"resources": {"name": "thing"}}), encoding="utf-8")
        with pytest.raises(JSONLoaderError, match="Invalid specification"):
            load_specification(file_path=path)
