"""
Figma REST API 讀取

讀取 Figma 檔案、列出可選擇的 frame，並批次取得節點圖片的 render URL。
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

import requests

logger = logging.getLogger(__name__)

FILE_KEY_RE = re.compile(r"figma\.com/(?:file|design)/([a-zA-Z0-9]+)")
FRAME_TYPES = ("FRAME", "COMPONENT", "COMPONENT_SET")


class FigmaAPIError(Exception):
    """Figma API 回傳非 2xx 或帶有 err 欄位."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class FileSummary:
    name: str
    last_modified: str
    component_count: int
    style_count: int
    thumbnail_url: str

    @classmethod
    def from_file(cls, data: dict) -> "FileSummary":
        return cls(
            name=data.get("name", ""),
            last_modified=data.get("lastModified", ""),
            component_count=len(data.get("components") or {}),
            style_count=len(data.get("styles") or {}),
            thumbnail_url=data.get("thumbnailUrl", ""),
        )


@dataclass
class FrameInfo:
    id: str
    name: str
    type: str
    page: str


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str, timeout: float = 60):
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def _get(self, path: str, params: Optional[dict] = None) -> dict:
        url = f"{self.BASE_URL}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise FigmaAPIError(f"Figma API request failed: {e}") from e
        if not 200 <= resp.status_code < 300:
            raise FigmaAPIError(
                f"Figma API error {resp.status_code}: {_error_message(resp)}",
                status_code=resp.status_code,
            )
        data = resp.json()
        if isinstance(data, dict) and data.get("err"):
            raise FigmaAPIError(f"Figma API error {resp.status_code}: {data['err']}", status_code=resp.status_code)
        return data

    def get_file(self, file_key: str) -> dict:
        return self._get(f"/files/{file_key}")

    def get_images(self, file_key: str, node_ids: list, format: str = "png", scale: float = 1) -> dict:
        params = {"ids": ",".join(node_ids), "format": format, "scale": scale}
        data = self._get(f"/images/{file_key}", params=params)
        logger.info("Resolved %d image URLs for %s", len(data.get("images") or {}), file_key)
        return data


def _error_message(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict):
        return str(body.get("err") or body.get("message") or body)[:200]
    return str(body)[:200]


def extract_file_key(url: str) -> Optional[str]:
    """從 figma.com/file/<key> 或 figma.com/design/<key> 網址取出 file key."""
    match = FILE_KEY_RE.search(url or "")
    return match.group(1) if match else None


def extract_frames(document: dict) -> List[FrameInfo]:
    """列出每個頁面（CANVAS）下的頂層 frame / component."""
    frames = []
    for page in document.get("children", []) or []:
        if page.get("type") != "CANVAS":
            continue
        for child in page.get("children", []) or []:
            if child.get("type") in FRAME_TYPES:
                frames.append(FrameInfo(
                    id=child.get("id", ""),
                    name=child.get("name", ""),
                    type=child["type"],
                    page=page.get("name", ""),
                ))
    return frames


def find_frame_nodes(document: dict, frame_ids: Optional[List[str]] = None) -> List[dict]:
    """取得指定 id 的頂層 frame 原始節點；未指定時回傳全部."""
    wanted = set(frame_ids or [])
    nodes = []
    for page in document.get("children", []) or []:
        if page.get("type") != "CANVAS":
            continue
        for child in page.get("children", []) or []:
            if child.get("type") not in FRAME_TYPES:
                continue
            if not wanted or child.get("id") in wanted:
                nodes.append(child)
    return nodes
