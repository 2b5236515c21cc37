"""Transfer-function parameter configuration.

Defaults follow the SVG ``feFuncX`` attribute defaults, so a function built
from defaults alone leaves its channel untouched.
"""

from __future__ import annotations

from dataclasses import dataclass

from svgfx.config.operations import ParameterSpec


@dataclass(frozen=True)
class TransferConfig:
    """Configuration for all transfer-function parameters.

    ``intercept`` and ``offset`` are expressed in unit space here; the
    transfer factory scales them to code values. Their neutral value is 0 in
    either unit.
    """

    slope: ParameterSpec = ParameterSpec(
        name="slope",
        default=1.0,
        neutral=1.0,
        description="Linear slope applied to the code value: 1.0=no change",
    )

    intercept: ParameterSpec = ParameterSpec(
        name="intercept",
        default=0.0,
        neutral=0.0,
        description="Linear intercept in unit space: 0.0=no change",
    )

    amplitude: ParameterSpec = ParameterSpec(
        name="amplitude",
        default=1.0,
        neutral=1.0,
        description="Gamma amplitude: 1.0=no change",
    )

    exponent: ParameterSpec = ParameterSpec(
        name="exponent",
        default=1.0,
        neutral=1.0,
        description="Gamma exponent: 1.0=linear, <1=brighter, >1=darker",
    )

    offset: ParameterSpec = ParameterSpec(
        name="offset",
        default=0.0,
        neutral=0.0,
        description="Gamma offset in unit space: 0.0=no change",
    )

    table_value: ParameterSpec = ParameterSpec(
        name="table_value",
        default=0.0,
        neutral=0.0,
        min_value=0.0,
        max_value=1.0,
        description="Table or discrete control point intensity",
    )

    def get_all_specs(self) -> dict[str, ParameterSpec]:
        """Get all parameter specs keyed by name."""
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "amplitude": self.amplitude,
            "exponent": self.exponent,
            "offset": self.offset,
            "table_value": self.table_value,
        }
