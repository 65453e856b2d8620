"""
===============================================================================
SVG RENDERER TESTS
===============================================================================

Tests for drawing a bench and its traced beams with svgwrite:

1. Layer structure and Y-up viewbox
2. Line clipping to the visible area
3. Beam coloring by polarization or by color tag
4. Element metadata at the 'none', 'standard' and 'full' levels
5. Saving to a file

Run with:
    python developer_tests/test_svg_renderer.py

Or with pytest:
    pytest developer_tests/test_svg_renderer.py -v
===============================================================================
"""

import sys
from pathlib import Path

# Add the src-python directory to the path for imports
src_python = Path(__file__).parent.parent.parent
if str(src_python) not in sys.path:
    sys.path.insert(0, str(src_python))


TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values (or two sequences of values) are close."""
    if hasattr(expected, '__len__'):
        assert len(actual) == len(expected), f"{msg}: length {len(actual)} != {len(expected)}"
        for a, e in zip(actual, expected):
            assert_close(a, e, tol, msg)
        return
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def build_bench():
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    scene.add_element({'type': 'board', 'x': 100.0, 'width': 300.0, 'height': 200.0})
    scene.add_element({'type': 'laser', 'name': 'Seed'})
    scene.add_element({'type': 'qwp', 'x': 100.0})
    scene.add_element({'type': 'splitter', 'x': 200.0})
    return scene


def test_layers_and_viewbox():
    """The drawing has Y-flipped object and ray layers."""
    from optical_bench_shapely.core.svg_renderer import SVGRenderer

    renderer = SVGRenderer(width=400, height=300, viewbox=(-50, -100, 400, 300))
    assert renderer.viewbox == (-50, -200, 400, 300)

    svg = renderer.to_string()
    assert 'id="layer-objects"' in svg
    assert 'id="layer-rays"' in svg
    assert 'scale(1, -1)' in svg
    assert 'inkscape:groupmode="layer"' in svg
    assert svg.index('layer-objects') < svg.index('layer-rays')


def test_clip_to_viewbox():
    """Lines are clipped to the viewbox, lines outside it are dropped."""
    from optical_bench_shapely.core.svg_renderer import SVGRenderer

    renderer = SVGRenderer(viewbox=(0, 0, 100, 100))
    assert_close(renderer._clip_to_viewbox(-50, 50, 150, 50), (0, 50, 100, 50), msg="horizontal")
    assert_close(renderer._clip_to_viewbox(10, 10, 20, 20), (10, 10, 20, 20), msg="inside")
    assert_close(renderer._clip_to_viewbox(50, 50, 50, 5000), (50, 50, 50, 100), msg="escape")
    assert renderer._clip_to_viewbox(-50, 150, 150, 150) is None
    assert renderer._clip_to_viewbox(200, 0, 300, 100) is None


def test_ray_colors():
    """Beams are false-colored by polarization or drawn in their color tag."""
    from optical_bench_shapely.core import mueller
    from optical_bench_shapely.core.geometry import Point
    from optical_bench_shapely.core.ray import RaySegment
    from optical_bench_shapely.core.svg_renderer import SVGRenderer

    seg = RaySegment(Point(10, 10), Point(90, 10), mueller.scale(mueller.STOKES_V, 0.5), (1, 2, 3))

    renderer = SVGRenderer(viewbox=(0, 0, 100, 100))
    renderer.draw_ray_segment(seg)
    svg = renderer.to_string()
    assert 'stroke="rgb(0, 0, 255)"' in svg
    assert 'stroke-opacity="0.5"' in svg
    assert 'data-stokes=' in svg
    assert 'I=0.500 V' in svg

    renderer = SVGRenderer(viewbox=(0, 0, 100, 100))
    renderer.draw_ray_segment(seg, color_by='intensity')
    assert 'stroke="rgb(1, 2, 3)"' in renderer.to_string()

    try:
        renderer.draw_ray_segment(seg, color_by='wavelength')
    except ValueError:
        pass
    else:
        raise AssertionError("Expected ValueError for unknown color_by")


def test_ray_outside_viewbox_skipped():
    from optical_bench_shapely.core import mueller
    from optical_bench_shapely.core.geometry import Point
    from optical_bench_shapely.core.ray import RaySegment
    from optical_bench_shapely.core.svg_renderer import SVGRenderer

    renderer = SVGRenderer(viewbox=(0, 0, 100, 100))
    renderer.draw_ray_segment(RaySegment(Point(500, 500), Point(600, 500), mueller.STOKES_H))
    assert 'class="ray"' not in renderer.to_string()


def test_metadata_levels():
    """Element metadata follows the metadata level."""
    from optical_bench_shapely.core.scene_objs import Mirror
    from optical_bench_shapely.core.scene import Scene
    from optical_bench_shapely.core.svg_renderer import SVGRenderer

    scene = Scene()
    mirror = scene.add_element({'type': 'mirror', 'name': 'M1'})
    assert isinstance(mirror, Mirror)

    full = SVGRenderer(metadata_level='full')
    full.draw_element(mirror)
    svg = full.to_string()
    assert f'id="obj-{mirror.uuid}"' in svg
    assert 'inkscape:label="M1"' in svg
    assert f'data-uuid="{mirror.uuid}"' in svg
    assert 'data-segment-type="mirror-front"' in svg

    standard = SVGRenderer(metadata_level='standard')
    standard.draw_element(mirror)
    svg = standard.to_string()
    assert 'inkscape:label="M1"' in svg
    assert 'data-uuid' not in svg

    none = SVGRenderer(metadata_level='none')
    none.draw_element(mirror)
    svg = none.to_string()
    assert mirror.uuid not in svg
    assert 'M1' not in svg


def test_draw_scene_with_trace():
    """A traced bench renders every element and its beams."""
    from optical_bench_shapely.core.simulator import Simulator
    from optical_bench_shapely.core.svg_renderer import SVGRenderer

    scene = build_bench()
    segments = Simulator(scene).run()
    assert len(segments) == 4

    renderer = SVGRenderer.for_scene(scene, margin=20.0)
    min_x, min_y, width, height = renderer.user_viewbox
    assert_close((min_x, min_y), (-70.0, -120.0), msg="viewbox origin")
    assert_close((width, height), (340.0, 240.0), msg="viewbox size")

    assert renderer.draw_scene(scene, segments) is True
    svg = renderer.to_string()
    assert svg.count('class="ray"') == 4
    assert svg.count('class="element ') == 4
    assert 'inkscape:label="Seed"' in svg
    # Board first so it sits under the optics
    assert svg.index('element board') < svg.index('element laser')


def test_for_empty_scene():
    from optical_bench_shapely.core.scene import Scene
    from optical_bench_shapely.core.svg_renderer import SVGRenderer

    renderer = SVGRenderer.for_scene(Scene(), width=200, height=100)
    assert renderer.user_viewbox == (0, 0, 200, 100)


def test_save():
    """save() writes a standalone SVG file."""
    import tempfile
    from optical_bench_shapely.core.simulator import Simulator
    from optical_bench_shapely.core.svg_renderer import SVGRenderer

    scene = build_bench()
    renderer = SVGRenderer.for_scene(scene)
    renderer.draw_scene(scene, Simulator(scene).run())

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / 'bench.svg'
        renderer.save(str(path))
        content = path.read_text()
    assert content.startswith('<?xml')
    assert '<svg' in content
    assert 'layer-rays' in content


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SVG RENDERER TESTS")
    print("=" * 78)

    tests = [
        ("Layers and viewbox", test_layers_and_viewbox),
        ("Clipping", test_clip_to_viewbox),
        ("Ray colors", test_ray_colors),
        ("Ray outside viewbox", test_ray_outside_viewbox_skipped),
        ("Metadata levels", test_metadata_levels),
        ("Scene with trace", test_draw_scene_with_trace),
        ("Empty scene", test_for_empty_scene),
        ("save()", test_save),
    ]

    passed = 0
    failed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
            print(f"  PASS: {name}")
        except Exception as e:
            failed += 1
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
