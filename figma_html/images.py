"""
Image resolver: collect image-bearing nodes, resolve their render URLs in one
batched call, then download them concurrently.

A failed download is logged and left out of the result; the batch as a whole
never raises for it.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Optional

import requests

from .nodes import DesignNode

logger = logging.getLogger(__name__)

ID_DELIMITER = ";"


def normalize_node_id(node_id: str) -> str:
    """Instance-composite ids (``I1:2;3:4``) are rendered by their first part."""
    return node_id.split(ID_DELIMITER, 1)[0]


def asset_name(node_id: str) -> str:
    return normalize_node_id(node_id).replace(":", "-")


def _is_image_node(node: DesignNode) -> bool:
    return node.type == "IMAGE" or node.has_image_fill()


def collect_image_node_ids(nodes: Iterable[DesignNode]) -> List[str]:
    seen: Dict[str, None] = {}

    def visit(node: DesignNode) -> None:
        if node.id and _is_image_node(node):
            seen.setdefault(normalize_node_id(node.id), None)
        for child in node.children:
            visit(child)

    for node in nodes:
        visit(node)
    return list(seen)


def fetch_image_urls(client, file_key: str, node_ids: List[str], format: str = "png", scale: float = 1) -> Dict[str, str]:
    """One ``GET /v1/images`` call for all ids; null renders are dropped."""
    if not node_ids:
        return {}
    data = client.get_images(file_key, node_ids, format=format, scale=scale)
    urls = {}
    for node_id, url in (data.get("images") or {}).items():
        if url:
            urls[node_id] = url
        else:
            logger.warning("Figma returned no render for node %s", node_id)
    return urls


def _download(url: str, timeout: float) -> bytes:
    resp = requests.get(url, timeout=timeout)
    if not 200 <= resp.status_code < 300:
        raise requests.HTTPError(f"HTTP {resp.status_code} for {url}", response=resp)
    return resp.content


def download_images(urls: Dict[str, str], max_workers: int = 8, timeout: float = 60) -> Dict[str, bytes]:
    """Download every URL concurrently; return only the successful entries."""
    if not urls:
        return {}
    results: Dict[str, bytes] = {}
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(urls)))) as pool:
        futures = {pool.submit(_download, url, timeout): node_id for node_id, url in urls.items()}
        for future in as_completed(futures):
            node_id = futures[future]
            try:
                results[node_id] = future.result()
            except requests.RequestException as e:
                logger.warning("Skipping image %s: %s", node_id, e)
    logger.info("Downloaded %d/%d images", len(results), len(urls))
    return results


def fetch_images(client, file_key: str, node_ids: List[str], max_workers: int = 8,
                 timeout: float = 60, format: str = "png", scale: float = 1) -> Dict[str, bytes]:
    urls = fetch_image_urls(client, file_key, node_ids, format=format, scale=scale)
    return download_images(urls, max_workers=max_workers, timeout=timeout)


def resolve_image_src(node: DesignNode, image_map: Optional[Dict[str, str]]) -> Optional[str]:
    """Image source for a node, or None when the map has nothing for it."""
    if not image_map or not node.id:
        return None
    for key in (node.id, normalize_node_id(node.id), node.image_ref()):
        if key and key in image_map:
            return image_map[key]
    return None
