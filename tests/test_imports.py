"""Verify all modules import correctly."""

import sys
import os
import pytest

# Ensure package is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class TestCoreImports:
    """Core algorithm modules import with only numpy and Pillow."""

    def test_import_easing(self):
        from nodes.tween.core.easing import apply_easing, EASING_FUNCTIONS, list_easings
        assert callable(apply_easing)
        assert isinstance(EASING_FUNCTIONS, dict)

    def test_import_interpolation(self):
        from nodes.tween.core.interpolation import find_surrounding, interpolate, interpolate_at
        assert callable(interpolate)

    def test_import_pivot_and_zorder(self):
        from nodes.tween.core.pivot import set_pivot
        from nodes.tween.core.zorder import resolve_z_order
        assert callable(set_pivot)
        assert callable(resolve_z_order)

    def test_import_fill(self):
        from nodes.tween.core.flood_fill import flood_fill, FillRegion
        from nodes.tween.core.attachment import attach_fill, sync_fill_positions
        assert callable(flood_fill)
        assert callable(sync_fill_positions)

    def test_import_core_package(self):
        from nodes.tween.core import (
            interpolate, set_pivot, resolve_z_order, flood_fill, attach_fill, render_tick
        )
        assert callable(render_tick)

    def test_core_all_resolves(self):
        import nodes.tween.core as core
        for name in core.__all__:
            assert hasattr(core, name), name


class TestCategoryImports:
    """Each node module imports without error."""

    def test_import_track(self):
        from nodes.tween.track import NODE_CLASS_MAPPINGS
        assert isinstance(NODE_CLASS_MAPPINGS, dict)

    def test_import_scene_nodes(self):
        from nodes.tween.scene_nodes import NODE_CLASS_MAPPINGS
        assert isinstance(NODE_CLASS_MAPPINGS, dict)

    def test_import_fill(self):
        from nodes.tween.fill import NODE_CLASS_MAPPINGS
        assert isinstance(NODE_CLASS_MAPPINGS, dict)

    def test_import_category(self):
        from nodes.tween import NODE_CLASS_MAPPINGS, NODE_DISPLAY_NAME_MAPPINGS
        assert len(NODE_CLASS_MAPPINGS) == len(NODE_DISPLAY_NAME_MAPPINGS)
