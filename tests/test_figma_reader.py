"""
FigmaAPIClient / frame 擷取 mock 測試
不需要真實 Figma Token，全部用假資料。
"""
from unittest.mock import MagicMock

import pytest
import requests

from figma_html.figma_reader import (
    FigmaAPIClient,
    FigmaAPIError,
    FileSummary,
    extract_file_key,
    extract_frames,
    find_frame_nodes,
)


def _response(status, body):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body
    resp.text = str(body)
    return resp


class TestFigmaAPIClient:
    def _client(self, resp):
        client = FigmaAPIClient("token-123", timeout=5)
        client.session.get = MagicMock(return_value=resp)
        return client

    def test_token_header(self):
        client = FigmaAPIClient("token-123")
        assert client.session.headers["X-Figma-Token"] == "token-123"

    def test_get_file(self):
        client = self._client(_response(200, {"name": "App", "document": {}}))
        assert client.get_file("KEY")["name"] == "App"
        url = client.session.get.call_args[0][0]
        assert url == "https://api.figma.com/v1/files/KEY"
        assert client.session.get.call_args[1]["timeout"] == 5

    def test_get_images_params(self):
        client = self._client(_response(200, {"images": {"1:2": "https://x"}}))
        data = client.get_images("KEY", ["1:2", "3:4"])
        assert data["images"]["1:2"] == "https://x"
        params = client.session.get.call_args[1]["params"]
        assert params == {"ids": "1:2,3:4", "format": "png", "scale": 1}

    @pytest.mark.parametrize("status", [403, 404, 500])
    def test_non_2xx_raises_with_status(self, status):
        client = self._client(_response(status, {"status": status, "err": "Not allowed"}))
        with pytest.raises(FigmaAPIError) as exc:
            client.get_file("KEY")
        assert exc.value.status_code == status
        assert str(status) in str(exc.value)
        assert "Not allowed" in str(exc.value)

    def test_err_field_in_200_raises(self):
        client = self._client(_response(200, {"err": "Invalid ids", "images": {}}))
        with pytest.raises(FigmaAPIError, match="Invalid ids"):
            client.get_images("KEY", ["bad"])

    def test_transport_error_wrapped(self):
        client = FigmaAPIClient("t")
        client.session.get = MagicMock(side_effect=requests.ConnectionError("down"))
        with pytest.raises(FigmaAPIError) as exc:
            client.get_file("KEY")
        assert exc.value.status_code is None


def test_extract_file_key():
    assert extract_file_key("https://www.figma.com/file/AbC123/My-App?node-id=1") == "AbC123"
    assert extract_file_key("https://figma.com/design/XyZ789/Other") == "XyZ789"
    assert extract_file_key("https://example.com/file/AbC123") is None
    assert extract_file_key("") is None


DOCUMENT = {
    "type": "DOCUMENT",
    "children": [
        {"id": "0:1", "type": "CANVAS", "name": "Page 1", "children": [
            {"id": "1:1", "type": "FRAME", "name": "Login"},
            {"id": "1:2", "type": "TEXT", "name": "loose text"},
            {"id": "1:3", "type": "COMPONENT_SET", "name": "Buttons"},
        ]},
        {"id": "0:2", "type": "CANVAS", "name": "Page 2", "children": [
            {"id": "2:1", "type": "COMPONENT", "name": "Card"},
        ]},
    ],
}


def test_extract_frames():
    frames = extract_frames(DOCUMENT)
    assert [(f.id, f.type, f.page) for f in frames] == [
        ("1:1", "FRAME", "Page 1"),
        ("1:3", "COMPONENT_SET", "Page 1"),
        ("2:1", "COMPONENT", "Page 2"),
    ]


def test_find_frame_nodes_filters_by_id():
    assert [n["id"] for n in find_frame_nodes(DOCUMENT)] == ["1:1", "1:3", "2:1"]
    assert [n["id"] for n in find_frame_nodes(DOCUMENT, ["2:1", "9:9"])] == ["2:1"]


def test_file_summary():
    summary = FileSummary.from_file({
        "name": "App", "lastModified": "2024-01-01T00:00:00Z",
        "components": {"a": {}, "b": {}}, "styles": {"s": {}}, "thumbnailUrl": "https://t",
    })
    assert (summary.name, summary.component_count, summary.style_count) == ("App", 2, 1)
