"""
Smoke tests：驗證套件可匯入、版本與公開 API 存在。
"""


def test_import_package():
    """套件可正常匯入"""
    import figma_html
    assert figma_html.__version__ == "0.1.0"


def test_public_api():
    """公開 API 可從 figma_html 取得"""
    from figma_html import (
        __version__,
        DesignNode,
        NodeTree,
        detect_archetype,
        generate_frame,
        generate_html,
        generate_css,
        enhance_component_styles,
        FigmaAPIClient,
        FigmaAPIError,
        fetch_images,
        build_bundle,
        generate_project,
        render_file,
        load_config,
    )
    assert __version__ == "0.1.0"
    assert issubclass(FigmaAPIError, Exception)
    for fn in (detect_archetype, generate_frame, generate_html, generate_css, enhance_component_styles,
               fetch_images, build_bundle, generate_project, render_file, load_config):
        assert callable(fn)
    assert DesignNode and NodeTree and FigmaAPIClient


def test_generate_frame_from_raw_dict():
    """最小合法節點即可產生 HTML 與 CSS"""
    from figma_html import DesignNode, generate_frame

    node = DesignNode.from_dict({
        "id": "1:1",
        "type": "FRAME",
        "name": "Empty",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 100, "height": 100},
        "children": [],
    })
    result = generate_frame([node])
    assert result.archetype == "other"
    assert result.html.startswith("<div")
    assert ".frame-1-1 {" in result.css
