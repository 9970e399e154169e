#!/usr/bin/env python3
"""
figma-html CLI — Figma 設計稿 → HTML/CSS

  python -m figma_html.cli frames --url <figma url>          # 列出可選的 frame
  python -m figma_html.cli generate --file-key KEY --frame 1:2 --zip
  python -m figma_html.cli render saved-file.json --output ./out   # 離線產生
"""

import argparse
import logging
import sys

from figma_html import __version__

from .config import FIGMA_HTTP_TIMEOUT, DEFAULT_CONFIG_PATH, load_config, resolve_token
from .figma_reader import FigmaAPIClient, FigmaAPIError, FileSummary, extract_file_key, extract_frames
from .generator import OUTPUT_TYPES, generate_project, render_file

LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


def setup_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("figma_html")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _report_api_error(e: FigmaAPIError, file_key: str) -> None:
    if e.status_code == 403:
        print("❌ Figma API 403：Token 無效或已過期，請重新產生 FIGMA_TOKEN。")
    elif e.status_code == 404:
        print(f"❌ Figma API 404：找不到檔案 '{file_key}'，請確認 file key 是否正確。")
    else:
        print(f"❌ Figma API 錯誤：{e}")


def _resolve_file_key(args, config: dict) -> str:
    if getattr(args, "url", None):
        key = extract_file_key(args.url)
        if not key:
            print(f"❌ 無法從網址解析 file key：{args.url}")
        return key or ""
    figma_cfg = config.get("figma", {}) if isinstance(config.get("figma"), dict) else {}
    return args.file_key or figma_cfg.get("fileKey") or ""


def _require(token: str, file_key: str) -> bool:
    if not token:
        print(f"❌ 請設定 FIGMA_TOKEN 環境變數，或在 {DEFAULT_CONFIG_PATH} 的 figma.personalAccessToken 設定。")
        print("   取得方式：Figma → Settings → Personal access tokens → 新增")
        return False
    if not file_key:
        print("❌ 請使用 --file-key / --url 或在 config 的 figma.fileKey 設定 Figma 檔案 key。")
        return False
    return True


def cmd_frames(args, config: dict) -> int:
    """Frames: 讀取檔案並列出可產生的頂層 frame."""
    token = resolve_token(config)
    file_key = _resolve_file_key(args, config)
    if not _require(token, file_key):
        return 1

    print(f"📥 Fetching Figma file: {file_key}")
    client = FigmaAPIClient(token, timeout=FIGMA_HTTP_TIMEOUT)
    try:
        data = client.get_file(file_key)
    except FigmaAPIError as e:
        _report_api_error(e, file_key)
        return 1

    summary = FileSummary.from_file(data)
    print(f"   ✅ {summary.name}（最後修改：{summary.last_modified}）")
    print(f"   🧩 {summary.component_count} components, 🎨 {summary.style_count} styles")
    frames = extract_frames(data.get("document", {}))
    if not frames:
        print("   ℹ️  此檔案沒有任何頂層 frame。")
        return 0
    for frame in frames:
        print(f"   • {frame.id:<12} {frame.type:<14} {frame.page} / {frame.name}")
    print(f"\n   💡 使用 'figma-html generate --file-key {file_key} --frame <id>' 產生程式碼。")
    return 0


def cmd_generate(args, config: dict) -> int:
    """Generate: 從 Figma 產生 HTML/CSS."""
    token = resolve_token(config)
    file_key = _resolve_file_key(args, config)
    if not _require(token, file_key):
        return 1

    export_cfg = config.get("export", {}) if isinstance(config.get("export"), dict) else {}
    images_cfg = config.get("images", {}) if isinstance(config.get("images"), dict) else {}
    output = args.output or export_cfg.get("outputDir") or "./generated"
    output_type = args.output_type or export_cfg.get("outputType") or "both"
    archive = args.zip or bool(export_cfg.get("archive"))
    include_images = not args.no_images and export_cfg.get("includeImages", True) is not False

    print(f"🚀 Generating from Figma: {file_key}")
    try:
        path = generate_project(
            figma_token=token,
            file_key=file_key,
            output=output,
            frame_ids=args.frame,
            archive=archive,
            output_type=output_type,
            include_images=include_images,
            image_format=images_cfg.get("format", "png"),
            image_scale=images_cfg.get("scale", 1),
        )
    except FigmaAPIError as e:
        _report_api_error(e, file_key)
        return 1
    except ValueError as e:
        print(f"❌ Generate failed: {e}")
        return 1

    print(f"✅ Generated {output_type} to {path}")
    return 0


def cmd_render(args, config: dict) -> int:
    """Render: 從已存檔的 Figma JSON 離線產生（不下載圖片）."""
    export_cfg = config.get("export", {}) if isinstance(config.get("export"), dict) else {}
    output = args.output or export_cfg.get("outputDir") or "./generated"
    print(f"📄 Rendering {args.input}")
    try:
        path = render_file(
            args.input,
            output,
            frame_ids=args.frame,
            archive=args.zip,
            output_type=args.output_type or "both",
        )
    except (OSError, ValueError) as e:
        print(f"❌ Render failed: {e}")
        return 1
    print(f"✅ Rendered to {path}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="figma-html: Figma designs → HTML/CSS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    frames_p = sub.add_parser("frames", help="List selectable frames",
        epilog="Examples:\n  figma-html frames --file-key ABC123\n  figma-html frames --url https://www.figma.com/design/ABC123/App",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    frames_p.add_argument("--file-key", help="Figma file key")
    frames_p.add_argument("--url", help="Figma file URL")

    gen_p = sub.add_parser("generate", help="Figma → HTML/CSS",
        epilog="Examples:\n  figma-html generate --file-key ABC123 --frame 1:2 --output ./out\n  figma-html generate --url https://www.figma.com/file/ABC123/App --zip",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    gen_p.add_argument("--file-key", help="Figma file key")
    gen_p.add_argument("--url", help="Figma file URL")
    gen_p.add_argument("--frame", action="append", help="Frame id to export (repeatable, default: all)")
    gen_p.add_argument("--output", help="Output directory or zip path")
    gen_p.add_argument("--zip", action="store_true", help="Write a .zip archive")
    gen_p.add_argument("--output-type", choices=OUTPUT_TYPES, help="Emit html, css or both")
    gen_p.add_argument("--no-images", action="store_true", help="Skip image download")

    render_p = sub.add_parser("render", help="Offline: saved Figma JSON → HTML/CSS")
    render_p.add_argument("input", help="Saved GET /v1/files response")
    render_p.add_argument("--frame", action="append", help="Frame id to export (repeatable)")
    render_p.add_argument("--output", help="Output directory or zip path")
    render_p.add_argument("--zip", action="store_true", help="Write a .zip archive")
    render_p.add_argument("--output-type", choices=OUTPUT_TYPES, help="Emit html, css or both")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    config = load_config(args.config)

    if args.command == "frames":
        return cmd_frames(args, config)
    if args.command == "generate":
        return cmd_generate(args, config)
    if args.command == "render":
        return cmd_render(args, config)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
