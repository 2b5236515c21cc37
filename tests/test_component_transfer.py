"""Tests for ComponentTransferNode (per-channel transfer with lazy table caching)."""

import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

import svgfx.nodes.component_transfer as component_transfer_module
from svgfx import (
    CachedRaster,
    Channel,
    ComponentTransferNode,
    ConfigurationError,
    DiscreteTransfer,
    FilterNode,
    GammaTransfer,
    IdentityTransfer,
    LinearTransfer,
    RasterSourceNode,
    Rect,
    RenderContext,
    ResourceError,
    TableTransfer,
)
from svgfx.transfer import compile_transfer_table


class RecordingSource:
    """Source node that records every context it is rendered with."""

    def __init__(self, raster: CachedRaster | None):
        self.raster = raster
        self.contexts = []

    def get_sources(self):
        return []

    def get_bounds(self):
        return None if self.raster is None else self.raster.bounds

    def render(self, context):
        self.contexts.append(context)
        return self.raster


@pytest.fixture
def context():
    return RenderContext()


@pytest.fixture
def gradient_pixels():
    """Create a 16x16 ARGB image covering all 256 code values per channel."""
    values = np.arange(256, dtype=np.uint8).reshape(16, 16)
    pixels = np.empty((16, 16, 4), dtype=np.uint8)
    pixels[..., 0] = values
    pixels[..., 1] = values[::-1]
    pixels[..., 2] = values.T
    pixels[..., 3] = 255 - values
    return pixels


@pytest.fixture
def gradient_source(gradient_pixels):
    return RasterSourceNode(gradient_pixels, origin=(3, -7))


class TestConstruction:
    """Test construction and configuration accessors."""

    def test_defaults(self):
        node = ComponentTransferNode()

        assert node.get_source() is None
        for channel in Channel:
            assert node.get_channel_function(channel) is None
            assert not node.is_compiled(channel)

    def test_initial_functions(self, gradient_source):
        alpha = LinearTransfer(0.0, 255.0)
        blue = GammaTransfer(1.0, 2.0, 0.0)
        node = ComponentTransferNode(gradient_source, alpha=alpha, blue=blue)

        assert node.get_source() is gradient_source
        assert node.get_channel_function(Channel.ALPHA) is alpha
        assert node.get_channel_function("red") is None
        assert node.get_channel_function("GREEN") is None
        assert node.get_channel_function(3) is blue

    def test_set_channel_function(self):
        node = ComponentTransferNode()
        spec = TableTransfer([0.0, 1.0])

        node.set_channel_function("green", spec)

        assert node.get_channel_function(Channel.GREEN) is spec
        assert node.green_function is spec

    def test_channel_properties(self):
        node = ComponentTransferNode()
        specs = [LinearTransfer(0.0, float(i)) for i in range(4)]

        node.alpha_function = specs[0]
        node.red_function = specs[1]
        node.green_function = specs[2]
        node.blue_function = specs[3]

        assert node.alpha_function is specs[0]
        assert node.red_function is specs[1]
        assert node.green_function is specs[2]
        assert node.blue_function is specs[3]

    def test_unknown_channel_name_raises(self):
        node = ComponentTransferNode()
        with pytest.raises(ValueError, match="not valid"):
            node.set_channel_function("cyan", None)

    def test_channel_index_out_of_range_raises(self):
        node = ComponentTransferNode()
        with pytest.raises(ValueError, match="outside valid range"):
            node.get_channel_function(4)

    def test_source_property(self, gradient_source):
        node = ComponentTransferNode()
        node.source = gradient_source

        assert node.source is gradient_source
        assert node.get_sources() == [gradient_source]

    def test_invalid_source_raises(self):
        with pytest.raises(TypeError, match="FilterNode"):
            ComponentTransferNode(source="not a node")
        node = ComponentTransferNode()
        with pytest.raises(TypeError, match="FilterNode"):
            node.set_source(42)

    def test_self_source_raises(self):
        node = ComponentTransferNode()
        with pytest.raises(ValueError, match="own source"):
            node.set_source(node)

    def test_is_filter_node(self):
        assert isinstance(ComponentTransferNode(), FilterNode)

    def test_identity_equality(self, gradient_source):
        a = ComponentTransferNode(gradient_source)
        b = ComponentTransferNode(gradient_source)
        assert a != b
        assert a == a


class TestGeometry:
    """Test bounds and region propagation."""

    def test_bounds_follow_source(self, gradient_source):
        node = ComponentTransferNode(gradient_source)
        assert node.get_bounds() == Rect(3, -7, 16, 16)

    def test_bounds_without_source(self):
        assert ComponentTransferNode().get_bounds() is None

    def test_dependency_region_clipped(self, gradient_source):
        node = ComponentTransferNode(gradient_source)
        region = node.get_dependency_region(0, Rect(0, 0, 10, 10))
        assert region == Rect(3, 0, 7, 9)

    def test_dirty_region_clipped(self, gradient_source):
        node = ComponentTransferNode(gradient_source)
        assert node.get_dirty_region(0, Rect(100, 100, 5, 5)) is None
        assert node.get_dirty_region(0, Rect(4, -6, 2, 2)) == Rect(4, -6, 2, 2)

    def test_region_bad_index_raises(self, gradient_source):
        node = ComponentTransferNode(gradient_source)
        with pytest.raises(IndexError):
            node.get_dependency_region(1, Rect(0, 0, 1, 1))


class TestRender:
    """Test rendering behaviour."""

    def test_single_black_pixel(self, context):
        """Test red Linear(0.5, 64) on an opaque black pixel."""
        source = RasterSourceNode(CachedRaster.filled(1, 1, argb=(255, 0, 0, 0)))
        node = ComponentTransferNode(source, red=LinearTransfer(slope=0.5, intercept=64))

        raster = node.render(context)

        assert raster.pixel(0, 0) == (255, 64, 0, 0)
        assert raster.channel(Channel.RED)[0, 0] == 64
        assert raster.channel(Channel.GREEN)[0, 0] == 0
        assert raster.channel(Channel.BLUE)[0, 0] == 0
        assert raster.channel(Channel.ALPHA)[0, 0] == 255

    def test_no_source_renders_nothing(self, context):
        assert ComponentTransferNode().render(context) is None

    def test_empty_source_renders_nothing(self, context):
        node = ComponentTransferNode(RasterSourceNode(None), red=LinearTransfer(0.0, 1.0))
        assert node.render(context) is None

    def test_source_returning_none(self, context):
        source = RecordingSource(None)
        node = ComponentTransferNode(source)

        assert node.render(context) is None
        assert source.contexts == [context]

    def test_context_passed_through(self):
        source = RecordingSource(CachedRaster.filled(2, 2))
        node = ComponentTransferNode(source)
        ctx = RenderContext().with_hints(quality="speed")

        node.render(ctx)

        assert source.contexts == [ctx]

    def test_area_of_interest(self, gradient_source, gradient_pixels):
        """Test the output covers only the area the source was asked for."""
        node = ComponentTransferNode(gradient_source, red=TableTransfer([1.0, 0.0]))
        ctx = RenderContext().with_area_of_interest(Rect(5, -5, 4, 3))

        raster = node.render(ctx)

        assert raster.bounds == Rect(5, -5, 4, 3)
        expected = 255 - gradient_pixels[2:5, 2:6, Channel.RED]
        np.testing.assert_array_equal(raster.channel(Channel.RED), expected)

    def test_origin_preserved(self, gradient_source, context):
        raster = ComponentTransferNode(gradient_source).render(context)

        assert raster.origin == (3, -7)
        assert raster.bounds == gradient_source.get_bounds()

    def test_all_identity_copies_source(self, gradient_source, gradient_pixels, context):
        raster = ComponentTransferNode(gradient_source).render(context)

        np.testing.assert_array_equal(raster.pixels, gradient_pixels)
        assert raster is not gradient_source.raster
        assert not np.shares_memory(raster.pixels, gradient_source.raster.pixels)

    def test_per_channel_tables_applied(self, gradient_source, gradient_pixels, context):
        specs = {
            Channel.ALPHA: DiscreteTransfer([0.0, 0.5, 1.0]),
            Channel.RED: TableTransfer([1.0, 0.0]),
            Channel.GREEN: LinearTransfer(2.0, -20.0),
            Channel.BLUE: GammaTransfer(1.0, 2.2, 0.0),
        }
        node = ComponentTransferNode(gradient_source)
        for channel, spec in specs.items():
            node.set_channel_function(channel, spec)

        raster = node.render(context)

        for channel, spec in specs.items():
            expected = compile_transfer_table(spec)[gradient_pixels[..., channel]]
            np.testing.assert_array_equal(raster.channel(channel), expected)

    def test_output_is_read_only(self, gradient_source, context):
        raster = ComponentTransferNode(gradient_source, red=LinearTransfer(0.5, 0.0)).render(
            context
        )
        with pytest.raises(ValueError):
            raster.pixels[0, 0, 0] = 1

    def test_source_unchanged(self, gradient_source, gradient_pixels, context):
        ComponentTransferNode(gradient_source, red=LinearTransfer(0.0, 0.0)).render(context)
        np.testing.assert_array_equal(gradient_source.raster.pixels, gradient_pixels)

    def test_idempotent(self, gradient_source, context):
        node = ComponentTransferNode(
            gradient_source, red=TableTransfer([0.2, 0.9, 0.1]), blue=GammaTransfer(0.8, 0.5, 3.0)
        )

        first = node.render(context)
        second = node.render(context)

        assert first is not second
        np.testing.assert_array_equal(first.pixels, second.pixels)

    def test_chained_nodes(self, gradient_source, gradient_pixels, context):
        """Test a node can use another component-transfer node as its source."""
        invert = TableTransfer([1.0, 0.0])
        inner = ComponentTransferNode(gradient_source, red=invert)
        outer = ComponentTransferNode(inner, red=invert)

        raster = outer.render(context)

        np.testing.assert_array_equal(raster.pixels, gradient_pixels)
        assert outer.get_bounds() == gradient_source.get_bounds()

    def test_replaced_source(self, context):
        node = ComponentTransferNode(RasterSourceNode(CachedRaster.filled(1, 1, (1, 2, 3, 4))))
        node.set_source(RasterSourceNode(CachedRaster.filled(1, 1, (9, 8, 7, 6), origin=(2, 2))))

        raster = node.render(context)

        assert raster.pixel(2, 2) == (9, 8, 7, 6)

    def test_unknown_spec_raises_on_render(self, gradient_source, context):
        node = ComponentTransferNode(gradient_source)
        node.set_channel_function("red", "linear")

        with pytest.raises(ConfigurationError):
            node.render(context)

    def test_allocation_failure(self, gradient_source, context, monkeypatch):
        def fail(*args, **kwargs):
            raise MemoryError

        node = ComponentTransferNode(gradient_source)
        monkeypatch.setattr(component_transfer_module.np, "empty_like", fail)

        with pytest.raises(ResourceError, match="Cannot allocate"):
            node.render(context)


class TestTableCache:
    """Test lazy compilation and invalidation of channel tables."""

    def test_render_compiles_all_channels(self, gradient_source, context):
        node = ComponentTransferNode(gradient_source, green=LinearTransfer(0.5, 0.0))
        node.render(context)

        for channel in Channel:
            assert node.is_compiled(channel)

    def test_set_invalidates_only_that_channel(self, gradient_source, context):
        node = ComponentTransferNode(gradient_source, red=LinearTransfer(0.5, 0.0))
        node.render(context)

        node.set_channel_function(Channel.ALPHA, LinearTransfer(0.0, 128.0))

        assert not node.is_compiled(Channel.ALPHA)
        assert node.is_compiled(Channel.RED)
        assert node.is_compiled(Channel.GREEN)
        assert node.is_compiled(Channel.BLUE)

    def test_cached_tables_reused(self, gradient_source, context, monkeypatch):
        node = ComponentTransferNode(gradient_source, red=LinearTransfer(0.5, 0.0))
        node.render(context)

        calls = []
        original = component_transfer_module.compile_transfer_table

        def counting(spec):
            calls.append(spec)
            return original(spec)

        monkeypatch.setattr(component_transfer_module, "compile_transfer_table", counting)
        node.render(context)
        assert calls == []

        spec = GammaTransfer(1.0, 0.5, 0.0)
        node.set_channel_function("blue", spec)
        node.render(context)
        assert calls == [spec]

    def test_mutation_isolation(self, gradient_source, context):
        """Test changing alpha never changes red, green or blue output."""
        node = ComponentTransferNode(
            gradient_source,
            red=TableTransfer([0.0, 0.3, 1.0]),
            green=DiscreteTransfer([0.25, 0.75]),
            blue=LinearTransfer(0.7, 20.0),
        )
        before = node.render(context)

        node.set_channel_function("alpha", LinearTransfer(0.0, 0.0))
        after = node.render(context)

        for channel in (Channel.RED, Channel.GREEN, Channel.BLUE):
            np.testing.assert_array_equal(after.channel(channel), before.channel(channel))
        assert (after.channel(Channel.ALPHA) == 0).all()

    def test_stale_table_not_published(self, gradient_source, context, monkeypatch):
        """Test a table compiled for a replaced function is used once but not cached."""
        old_spec = LinearTransfer(0.0, 10.0)
        new_spec = LinearTransfer(0.0, 200.0)
        node = ComponentTransferNode(gradient_source, red=old_spec)
        original = component_transfer_module.compile_transfer_table

        def racing(spec):
            table = original(spec)
            if spec is old_spec:
                node.set_channel_function("red", new_spec)
            return table

        monkeypatch.setattr(component_transfer_module, "compile_transfer_table", racing)
        raster = node.render(context)

        # This render used the function it snapshotted
        assert (raster.channel(Channel.RED) == 10).all()
        # The newer function is current and still needs compiling
        assert node.get_channel_function("red") is new_spec
        assert not node.is_compiled("red")

        monkeypatch.setattr(component_transfer_module, "compile_transfer_table", original)
        assert (node.render(context).channel(Channel.RED) == 200).all()

    def test_cache_equals_recompute(self, gradient_source, context):
        """Test a cached render matches a fresh node with the same functions."""
        spec = GammaTransfer(1.3, 0.7, -4.0)
        cached = ComponentTransferNode(gradient_source, alpha=spec)
        cached.render(context)

        fresh = ComponentTransferNode(gradient_source, alpha=spec)

        np.testing.assert_array_equal(
            cached.render(context).pixels, fresh.render(context).pixels
        )


class TestConcurrency:
    """Test renders racing channel updates from several threads."""

    def test_concurrent_render_and_set(self, gradient_source, gradient_pixels, context):
        specs = [
            LinearTransfer(0.0, 17.0),
            TableTransfer([1.0, 0.0]),
            DiscreteTransfer([0.1, 0.9]),
            GammaTransfer(1.0, 2.0, 0.0),
            IdentityTransfer(),
        ]
        expected_red = [compile_transfer_table(s)[gradient_pixels[..., Channel.RED]] for s in specs]

        node = ComponentTransferNode(gradient_source, red=specs[0], blue=LinearTransfer(0.5, 1.0))
        node.render(context)  # compile the kernel before the threads start

        stop = threading.Event()

        def mutate():
            i = 0
            while not stop.is_set():
                node.set_channel_function(Channel.RED, specs[i % len(specs)])
                i += 1
            return i

        def render_many():
            results = []
            for _ in range(50):
                results.append(node.render(context))
            return results

        with ThreadPoolExecutor(max_workers=6) as pool:
            mutators = [pool.submit(mutate) for _ in range(2)]
            renderers = [pool.submit(render_many) for _ in range(4)]
            try:
                rasters = [r for future in renderers for r in future.result()]
            finally:
                stop.set()
            for future in mutators:
                assert future.result() > 0

        expected_blue = compile_transfer_table(LinearTransfer(0.5, 1.0))[
            gradient_pixels[..., Channel.BLUE]
        ]
        for raster in rasters:
            red = raster.channel(Channel.RED)
            # Every render used one complete table for red
            assert any(np.array_equal(red, candidate) for candidate in expected_red)
            np.testing.assert_array_equal(
                raster.channel(Channel.ALPHA), gradient_pixels[..., Channel.ALPHA]
            )
            np.testing.assert_array_equal(
                raster.channel(Channel.GREEN), gradient_pixels[..., Channel.GREEN]
            )
            np.testing.assert_array_equal(raster.channel(Channel.BLUE), expected_blue)

        # Once quiet, the cache converges on the last function set
        final = node.render(context)
        current = node.get_channel_function(Channel.RED)
        np.testing.assert_array_equal(
            final.channel(Channel.RED),
            compile_transfer_table(current)[gradient_pixels[..., Channel.RED]],
        )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
