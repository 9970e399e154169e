"""
figma-html — Figma 設計稿轉 HTML/CSS（Python 管線）

節點分類（登入表單、側邊欄、表格、分頁標籤…）後套用對應樣板，輸出 Bootstrap 頁面與樣式表。
"""

__version__ = "0.1.0"

from .nodes import DesignNode, NodeTree, flatten_nodes
from .styles import css_class_name, rgba_from_color
from .detectors import detect_archetype
from .html_assembler import GeneratedFrame, generate_frame, generate_html
from .css_assembler import enhance_component_styles, generate_css
from .figma_reader import FigmaAPIClient, FigmaAPIError, extract_file_key, extract_frames
from .images import collect_image_node_ids, download_images, fetch_images
from .config import load_config, validate_config
from .generator import build_bundle, generate_project, render_file

__all__ = [
    "__version__",
    "DesignNode",
    "NodeTree",
    "flatten_nodes",
    "css_class_name",
    "rgba_from_color",
    "detect_archetype",
    "GeneratedFrame",
    "generate_frame",
    "generate_html",
    "enhance_component_styles",
    "generate_css",
    "FigmaAPIClient",
    "FigmaAPIError",
    "extract_file_key",
    "extract_frames",
    "collect_image_node_ids",
    "download_images",
    "fetch_images",
    "load_config",
    "validate_config",
    "build_bundle",
    "generate_project",
    "render_file",
]
