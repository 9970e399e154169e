"""
Generator — Figma frames → static HTML/CSS bundle.

One selected frame becomes ``index.html`` + ``styles.css``; several frames
become ``<slug>.html`` + ``<slug>.css`` each, with an ``index.html`` linking
them. Downloaded images land in ``images/``. The bundle is written either to
a directory or to a zip archive.
"""

from __future__ import annotations

import json
import logging
import zipfile
from dataclasses import dataclass, field
from html import escape
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import DOWNLOAD_WORKERS, FIGMA_HTTP_TIMEOUT
from .figma_reader import FigmaAPIClient, find_frame_nodes
from .html_assembler import generate_frame
from .images import asset_name, collect_image_node_ids, fetch_images
from .nodes import DesignNode

logger = logging.getLogger(__name__)

OUTPUT_TYPES = ("html", "css", "both")

BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.5/dist/css/bootstrap.min.css"
BOOTSTRAP_ICONS_CSS = "https://cdn.jsdelivr.net/npm/bootstrap-icons@1.11.3/font/bootstrap-icons.min.css"
BOOTSTRAP_JS = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.5/dist/js/bootstrap.bundle.min.js"

RESET_CSS = """\
* {
  box-sizing: border-box;
  margin: 0;
  padding: 0;
}

body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', sans-serif;
  line-height: 1.5;
  color: #333;
}
"""


@dataclass
class OutputBundle:
    files: Dict[str, Union[str, bytes]] = field(default_factory=dict)

    def add(self, name: str, content: Union[str, bytes]) -> None:
        self.files[name] = content

    def write_dir(self, base: Path) -> None:
        for name, content in self.files.items():
            _write(base / name, content)

    def write_zip(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, content in self.files.items():
                zf.writestr(name, content)

    def write(self, output: Union[str, Path], archive: bool = False) -> Path:
        target = Path(output)
        if archive:
            if target.suffix != ".zip":
                target = target.with_suffix(".zip")
            self.write_zip(target)
        else:
            self.write_dir(target)
        return target


def _kebab(name: str) -> str:
    out = []
    for ch in name:
        if ch.isalnum():
            out.append(ch.lower())
        else:
            out.append("-")
    slug = "".join(out).strip("-")
    while "--" in slug:
        slug = slug.replace("--", "-")
    return slug or "unnamed"


def _write(path: Path, content: Union[str, bytes]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


def _build_html_page(title: str, body: str, css_path: Optional[str]) -> str:
    stylesheet = f"  <link rel=\"stylesheet\" href=\"{css_path}\">\n" if css_path else ""
    return (
        "<!doctype html>\n"
        "<html lang=\"en\">\n<head>\n"
        "  <meta charset=\"utf-8\">\n"
        "  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1.0\">\n"
        f"  <title>{escape(title)}</title>\n"
        f"  <link rel=\"stylesheet\" href=\"{BOOTSTRAP_CSS}\">\n"
        f"  <link rel=\"stylesheet\" href=\"{BOOTSTRAP_ICONS_CSS}\">\n"
        + stylesheet
        + "</head>\n<body>\n<div class=\"frame-wrapper\">\n"
        + body
        + "</div>\n"
        f"<script src=\"{BOOTSTRAP_JS}\"></script>\n"
        "</body>\n</html>\n"
    )


def _index_page(pages: List[tuple]) -> str:
    links = "\n".join(
        f"    <li class=\"list-group-item\"><a href=\"./{slug}.html\">{escape(title)}</a></li>"
        for title, slug in pages
    )
    body = f"<ul class=\"list-group\">\n{links}\n</ul>\n"
    return _build_html_page("Index", body, None)


def build_bundle(
    frames: List[DesignNode],
    image_map: Optional[Dict[str, str]] = None,
    output_type: str = "both",
) -> OutputBundle:
    """Generate page and stylesheet files for each frame."""
    if output_type not in OUTPUT_TYPES:
        raise ValueError(f"Unknown output type '{output_type}' (expected one of {', '.join(OUTPUT_TYPES)})")
    bundle = OutputBundle()
    single = len(frames) == 1
    used: Dict[str, int] = {}
    pages = []
    for frame in frames:
        title = frame.name or "Figma Export"
        if single:
            html_name, css_name = "index.html", "styles.css"
        else:
            slug = _kebab(title)
            used[slug] = used.get(slug, 0) + 1
            if used[slug] > 1:
                slug = f"{slug}-{used[slug]}"
            html_name, css_name = f"{slug}.html", f"{slug}.css"
            pages.append((title, slug))

        result = generate_frame([frame], image_map)
        logger.info("Generated frame '%s' as %s", title, result.archetype)
        with_css = output_type in ("css", "both")
        if output_type in ("html", "both"):
            bundle.add(html_name, _build_html_page(title, result.html, f"./{css_name}" if with_css else None))
        if with_css:
            bundle.add(css_name, RESET_CSS + "\n" + result.css)

    if pages and output_type in ("html", "both"):
        bundle.add("index.html", _index_page(pages))
    return bundle


def render_file(json_path: str, output: str, frame_ids: Optional[List[str]] = None,
                archive: bool = False, output_type: str = "both") -> Path:
    """Offline pass over a saved ``GET /v1/files`` response (no images)."""
    with open(json_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    document = data.get("document", data)
    raw_frames = find_frame_nodes(document, frame_ids)
    if not raw_frames:
        raise ValueError("No matching Figma frames found.")
    frames = [DesignNode.from_dict(f) for f in raw_frames]
    return build_bundle(frames, output_type=output_type).write(output, archive)


def generate_project(
    figma_token: str,
    file_key: str,
    output: str,
    frame_ids: Optional[List[str]] = None,
    archive: bool = False,
    output_type: str = "both",
    include_images: bool = True,
    image_format: str = "png",
    image_scale: float = 1,
) -> Path:
    client = FigmaAPIClient(figma_token, timeout=FIGMA_HTTP_TIMEOUT)
    figma_data = client.get_file(file_key)
    raw_frames = find_frame_nodes(figma_data.get("document", {}), frame_ids)
    if not raw_frames:
        raise ValueError("No matching Figma frames found.")
    frames = [DesignNode.from_dict(f) for f in raw_frames]

    image_map: Dict[str, str] = {}
    blobs: Dict[str, bytes] = {}
    if include_images and output_type in ("html", "both"):
        node_ids = collect_image_node_ids(frames)
        blobs = fetch_images(
            client, file_key, node_ids,
            max_workers=DOWNLOAD_WORKERS, timeout=FIGMA_HTTP_TIMEOUT,
            format=image_format, scale=image_scale,
        )
        for node_id in blobs:
            image_map[node_id] = f"images/{asset_name(node_id)}.{image_format}"

    bundle = build_bundle(frames, image_map, output_type)
    for node_id, blob in blobs.items():
        bundle.add(image_map[node_id], blob)
    return bundle.write(output, archive)
