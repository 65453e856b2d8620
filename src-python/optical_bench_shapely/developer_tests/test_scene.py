"""
===============================================================================
SCENE TESTS
===============================================================================

Tests for the Scene container:

1. TRACING SETTINGS
   - Defaults for max_bounces, min_intensity and escape_distance
   - Validation of new values

2. ELEMENT MANAGEMENT
   - add_object / add_element / remove_object / clear
   - Lookup by uuid and by name, laser listing

3. FIBER PAIRING
   - Allowed and rejected pairings
   - Re-pairing breaks previous links
   - Removing an element breaks its link
   - Pairing snapshots are independent copies

Run with:
    python developer_tests/test_scene.py

Or with pytest:
    pytest developer_tests/test_scene.py -v
===============================================================================
"""

import sys
from pathlib import Path

# Add the src-python directory to the path for imports
src_python = Path(__file__).parent.parent.parent
if str(src_python) not in sys.path:
    sys.path.insert(0, str(src_python))


def expect_value_error(func, *args):
    """Call func(*args) and fail unless it raises ValueError."""
    try:
        func(*args)
    except ValueError:
        return
    raise AssertionError(f"Expected ValueError from {func.__name__}{args!r}")


# =============================================================================
# TRACING SETTINGS
# =============================================================================

def test_default_settings():
    """A new scene carries the default tracing limits."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    assert scene.max_bounces == 30
    assert scene.min_intensity == 0.01
    assert scene.escape_distance == 2000.0
    assert scene.error is None
    assert scene.warning is None


def test_settings_validation():
    """Settings reject non-positive, non-finite and non-numeric values."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    scene.max_bounces = 5
    scene.min_intensity = 0.5
    scene.escape_distance = 100
    assert scene.max_bounces == 5
    assert scene.min_intensity == 0.5
    assert scene.escape_distance == 100.0

    def set_max_bounces(value):
        scene.max_bounces = value

    def set_min_intensity(value):
        scene.min_intensity = value

    def set_escape_distance(value):
        scene.escape_distance = value

    for bad in (0, -1, 2.5, True, '10'):
        expect_value_error(set_max_bounces, bad)
    for bad in (0, -0.1, float('nan'), float('inf'), None):
        expect_value_error(set_min_intensity, bad)
    for bad in (0.0, -5.0, float('inf'), 'far'):
        expect_value_error(set_escape_distance, bad)

    assert scene.max_bounces == 5
    assert scene.min_intensity == 0.5
    assert scene.escape_distance == 100.0


# =============================================================================
# ELEMENT MANAGEMENT
# =============================================================================

def test_add_and_lookup():
    """Elements are stored in order and can be found by uuid and name."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    laser = scene.add_element({'type': 'laser', 'name': 'L1'})
    board = scene.add_element({'type': 'board'})
    mirror = scene.add_element({'type': 'mirror', 'x': 100.0})

    assert scene.objs == [laser, board, mirror]
    assert scene.optical_objs == [laser, mirror]
    assert scene.lasers() == [laser]
    assert scene.get_by_uuid(mirror.uuid) is mirror
    assert scene.get_by_uuid('missing') is None
    assert scene.get_by_name('L1') is laser
    assert scene.get_by_name('nope') is None
    assert '3 objects' in repr(scene)


def test_add_element_rejects_unknown_type():
    """add_element() raises for an unknown type and adds nothing."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    expect_value_error(scene.add_element, {'type': 'prism'})
    assert scene.objs == []


def test_remove_and_clear():
    """remove_object() and clear() empty the scene."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    laser = scene.add_element({'type': 'laser'})
    blocker = scene.add_element({'type': 'blocker'})

    scene.remove_object(laser)
    assert scene.objs == [blocker]
    assert scene.optical_objs == [blocker]
    assert scene.lasers() == []

    scene.warning = 'stale'
    scene.clear()
    assert scene.objs == [] and scene.optical_objs == []
    assert scene.warning is None


def test_scene_display_name():
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    assert scene.get_display_name() == f"Scene_{scene.uuid[:8]}"
    scene.name = 'Cooling beams'
    assert scene.get_display_name() == 'Cooling beams'


# =============================================================================
# FIBER PAIRING
# =============================================================================

def test_pair_coupler_and_amplifier():
    """Pairing is symmetric and listed once."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    coupler = scene.add_element({'type': 'fiber-coupler'})
    amp = scene.add_element({'type': 'amplifier', 'y': 200.0})

    scene.pair_fiber(coupler, amp)
    assert scene.get_partner(coupler) is amp
    assert scene.get_partner(amp) is coupler
    assert scene.pairs() == [(coupler, amp)]


def test_pair_two_couplers():
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    a = scene.add_element({'type': 'fiber-coupler'})
    b = scene.add_element({'type': 'fiber-coupler', 'y': 100.0})
    scene.pair_fiber(a, b)
    assert scene.get_partner(b) is a
    assert len(scene.pairs()) == 1


def test_rejected_pairings():
    """Only coupler-to-coupler and coupler-to-amplifier links inside the scene."""
    from optical_bench_shapely.core.scene import Scene
    from optical_bench_shapely.core.scene_objs import FiberCoupler

    scene = Scene()
    coupler = scene.add_element({'type': 'fiber-coupler'})
    amp = scene.add_element({'type': 'amplifier'})
    mirror = scene.add_element({'type': 'mirror'})
    outside = FiberCoupler(scene)

    expect_value_error(scene.pair_fiber, coupler, coupler)
    expect_value_error(scene.pair_fiber, amp, coupler)
    expect_value_error(scene.pair_fiber, coupler, mirror)
    expect_value_error(scene.pair_fiber, mirror, coupler)
    expect_value_error(scene.pair_fiber, coupler, outside)
    assert scene.pairs() == []


def test_repairing_breaks_old_link():
    """Each element has at most one partner."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    a = scene.add_element({'type': 'fiber-coupler'})
    b = scene.add_element({'type': 'fiber-coupler'})
    amp = scene.add_element({'type': 'amplifier'})

    scene.pair_fiber(a, b)
    scene.pair_fiber(a, amp)
    assert scene.get_partner(a) is amp
    assert scene.get_partner(amp) is a
    assert scene.get_partner(b) is None
    assert scene.pairs() == [(a, amp)]

    assert scene.unpair_fiber(amp) is a
    assert scene.get_partner(a) is None
    assert scene.unpair_fiber(amp) is None


def test_remove_object_unpairs():
    """Removing a paired element leaves its partner unpaired."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    coupler = scene.add_element({'type': 'fiber-coupler'})
    amp = scene.add_element({'type': 'amplifier'})
    scene.pair_fiber(coupler, amp)

    scene.remove_object(coupler)
    assert scene.get_partner(amp) is None
    assert scene.pairs() == []


def test_pairing_snapshot_is_a_copy():
    """Later pairing changes do not alter an earlier snapshot."""
    from optical_bench_shapely.core.scene import Scene

    scene = Scene()
    coupler = scene.add_element({'type': 'fiber-coupler'})
    amp = scene.add_element({'type': 'amplifier'})
    scene.pair_fiber(coupler, amp)

    snapshot = scene.pairing_snapshot()
    scene.unpair_fiber(coupler)
    assert snapshot[coupler.uuid] is amp
    assert snapshot[amp.uuid] is coupler
    assert scene.pairing_snapshot() == {}


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SCENE TESTS")
    print("=" * 78)

    tests = [
        ("Default settings", test_default_settings),
        ("Settings validation", test_settings_validation),
        ("Add and lookup", test_add_and_lookup),
        ("Unknown type", test_add_element_rejects_unknown_type),
        ("Remove and clear", test_remove_and_clear),
        ("Display name", test_scene_display_name),
        ("Coupler to amplifier", test_pair_coupler_and_amplifier),
        ("Coupler to coupler", test_pair_two_couplers),
        ("Rejected pairings", test_rejected_pairings),
        ("Re-pairing", test_repairing_breaks_old_link),
        ("Removal unpairs", test_remove_object_unpairs),
        ("Pairing snapshot", test_pairing_snapshot_is_a_copy),
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
