"""Tests for building transfer functions from SVG-style parameters."""

import numpy as np
import pytest

from svgfx.config import TRANSFER_CONFIG
from svgfx.exceptions import ConfigurationError
from svgfx.transfer import (
    DiscreteTransfer,
    GammaTransfer,
    IdentityTransfer,
    LinearTransfer,
    TableTransfer,
    TransferKind,
    compile_transfer_table,
    create_transfer,
    parse_table_values,
    resolve_kind,
)


class TestResolveKind:
    """Test kind name resolution."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("identity", TransferKind.IDENTITY),
            ("TABLE", TransferKind.TABLE),
            (" discrete ", TransferKind.DISCRETE),
            ("Linear", TransferKind.LINEAR),
            ("gamma", TransferKind.GAMMA),
        ],
    )
    def test_names(self, name, expected):
        assert resolve_kind(name) is expected

    def test_member_passthrough(self):
        assert resolve_kind(TransferKind.GAMMA) is TransferKind.GAMMA

    def test_unknown_name_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown transfer kind"):
            resolve_kind("sepia")

    def test_unknown_type_raises(self):
        with pytest.raises(ConfigurationError):
            resolve_kind(3)


class TestCreateTransfer:
    """Test create_transfer for each kind."""

    def test_identity(self):
        assert isinstance(create_transfer("identity"), IdentityTransfer)

    def test_table(self):
        spec = create_transfer("table", table_values=[0.0, 0.5, 1.0])
        assert spec == TableTransfer([0.0, 0.5, 1.0])

    def test_discrete(self):
        spec = create_transfer(TransferKind.DISCRETE, table_values=[0.5])
        assert isinstance(spec, DiscreteTransfer)
        assert (compile_transfer_table(spec) == 128).all()

    def test_linear_scales_intercept(self):
        """Test the unit-space intercept becomes a code value."""
        spec = create_transfer("linear", slope=0.5, intercept=0.25)
        assert spec == LinearTransfer(slope=0.5, intercept=63.75)

    def test_gamma_scales_offset(self):
        spec = create_transfer("gamma", amplitude=2.0, exponent=0.5, offset=0.1)
        assert isinstance(spec, GammaTransfer)
        assert spec.amplitude == 2.0
        assert spec.exponent == 0.5
        assert spec.offset == pytest.approx(25.5)

    def test_defaults_are_identity(self):
        """Test SVG defaults leave the channel unchanged for every kind."""
        identity = np.arange(256, dtype=np.uint8)
        for kind in TransferKind:
            table = compile_transfer_table(create_transfer(kind))
            np.testing.assert_array_equal(table, identity)

    def test_defaults_match_config(self):
        spec = create_transfer("gamma")
        assert spec.amplitude == TRANSFER_CONFIG.amplitude.default
        assert spec.exponent == TRANSFER_CONFIG.exponent.default

    def test_unused_parameters_ignored(self):
        spec = create_transfer("table", table_values=[0.0, 1.0], slope=3.0)
        assert isinstance(spec, TableTransfer)

    def test_unknown_kind_raises(self):
        with pytest.raises(ConfigurationError):
            create_transfer("posterize")

    def test_non_finite_slope_raises(self):
        with pytest.raises(ValueError, match="slope"):
            create_transfer("linear", slope=float("nan"))

    def test_non_numeric_offset_raises(self):
        with pytest.raises(TypeError, match="offset must be a number"):
            create_transfer("gamma", offset="0.5")

    def test_table_value_out_of_range_raises(self):
        with pytest.raises(ValueError, match="outside valid range"):
            create_transfer("discrete", table_values=[-0.5])


class TestParseTableValues:
    """Test tableValues attribute parsing."""

    def test_whitespace(self):
        assert parse_table_values("0 0.5 1") == (0.0, 0.5, 1.0)

    def test_commas_and_newlines(self):
        assert parse_table_values(" 0,0.25,\n 0.75 ,1 ") == (0.0, 0.25, 0.75, 1.0)

    def test_empty(self):
        assert parse_table_values("   ") == ()

    def test_garbage_raises(self):
        with pytest.raises(ValueError, match="tableValues"):
            parse_table_values("0 half 1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
