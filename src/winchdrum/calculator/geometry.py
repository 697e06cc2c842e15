"""
Drum spooling geometry - layers, wraps, diameters and spooled lengths.

Pure math: no I/O. Produces per-wrap rows plus a capacity summary for the
performance pass and the layer aggregator.

Layering model (conventional multi-layer drum):
- Effective core diameter = core + 2 × lebus liner thickness
- First layer pitch diameter = effective core + one cable diameter
- Wraps per layer = floor(flange-to-flange width / cable diameter),
  unless a wraps-per-layer override is given
- Each further layer grows the pitch diameter by 2 × cable diameter ×
  packing factor (cable nests into the grooves of the layer below)
- Each wrap adds one circumference at the current layer diameter
"""

import logging
from math import pi
from typing import List, Optional, Tuple

from ..io.loaders import Configuration, WrapRow, SpoolSummary, SpoolMeta
from .constants import (
    DEFAULT_PACKING_FACTOR,
    MAX_WRAP_ROWS,
    MAX_CAPACITY_LAYERS,
    SPOOL_TOLERANCE_M,
)
from .units import (
    positive_or,
    non_negative_or,
    truncate_to_whole,
    mm_to_in,
    in_to_m,
)

logger = logging.getLogger(__name__)


def resolve_wraps_per_layer(
    flange_to_flange_in: float,
    cable_dia_in: float,
    override: Optional[float] = None
) -> Tuple[int, int, Optional[float]]:
    """
    Work out how many wraps fit across the drum.

    Args:
        flange_to_flange_in: Width between flanges (in)
        cable_dia_in: Cable diameter (in)
        override: Manual wraps per layer; used when finite and >= 1

    Returns:
        Tuple of (calculated, used, accepted_override)
    """
    width = non_negative_or(flange_to_flange_in, 0.0)
    calc = truncate_to_whole(width / cable_dia_in) if cable_dia_in > 0 else 0

    accepted = positive_or(override, 0.0)
    if accepted >= 1:
        return calc, truncate_to_whole(accepted), accepted
    return calc, calc, None


def _layer_fits(layer_dia_in: float, cable_dia_in: float, flange_dia_in: Optional[float]) -> bool:
    """True if a layer at this pitch diameter stays inside the flange."""
    if flange_dia_in is None:
        return True
    return layer_dia_in + cable_dia_in <= flange_dia_in


def drum_capacity_m(
    bare_drum_dia_in: float,
    layer_growth_in: float,
    wraps_per_layer: int,
    cable_dia_in: float,
    flange_dia_in: Optional[float]
) -> Optional[float]:
    """
    Cable length (m) the drum holds when every layer up to the flange is full.

    Returns None when there is no flange limit to fill up to.
    """
    if flange_dia_in is None:
        return None
    if wraps_per_layer <= 0 or cable_dia_in <= 0:
        return 0.0

    capacity = 0.0
    layer_dia = bare_drum_dia_in
    for _ in range(MAX_CAPACITY_LAYERS):
        if not _layer_fits(layer_dia, cable_dia_in, flange_dia_in):
            break
        capacity += wraps_per_layer * in_to_m(pi * layer_dia)
        layer_dia += layer_growth_in
    else:
        logger.warning(
            f"Drum capacity stopped at {MAX_CAPACITY_LAYERS} layers below the flange; "
            f"reported capacity {capacity:.1f} m is a lower bound"
        )
    return capacity


def layer_geometry(config: Configuration) -> Tuple[List[WrapRow], SpoolSummary, SpoolMeta]:
    """
    Generate wrap rows for a drum + cable setup.

    Spooling stops once the required length (operating depth + dead end) is
    on the drum. If the next layer would not fit inside the flange, the rows
    stop there and the shortfall is reported rather than raised.

    Args:
        config: Drum and cable configuration

    Returns:
        Tuple of (rows, summary, meta)
    """
    cable_dia_in = mm_to_in(positive_or(config.cable_diameter_mm, 0.0))
    cable_len_m = non_negative_or(config.operating_depth_m, 0.0) + non_negative_or(config.dead_end_m, 0.0)

    effective_core_dia_in = (
        non_negative_or(config.core_diameter_in, 0.0)
        + 2 * non_negative_or(config.lebus_thickness_in, 0.0)
    )
    bare_drum_dia_in = effective_core_dia_in + cable_dia_in

    packing_factor = positive_or(config.packing_factor, DEFAULT_PACKING_FACTOR)
    layer_growth_in = 2 * cable_dia_in * packing_factor
    flange_dia_in = positive_or(config.flange_diameter_in, None)

    wraps_calc, wraps_used, override = resolve_wraps_per_layer(
        config.flange_to_flange_in, cable_dia_in, config.wraps_per_layer_override
    )

    rows: List[WrapRow] = []
    layer_no = 1
    layer_dia_in = bare_drum_dia_in
    spooled_m = 0.0
    wrap_no = 0
    capacity_exceeded = False

    if cable_dia_in > 0 and wraps_used > 0:
        while spooled_m + SPOOL_TOLERANCE_M < cable_len_m:
            if not _layer_fits(layer_dia_in, cable_dia_in, flange_dia_in):
                capacity_exceeded = True
                break

            wrap_len_in = pi * layer_dia_in
            wrap_len_m = in_to_m(wrap_len_in)

            for _ in range(wraps_used):
                if wrap_no >= MAX_WRAP_ROWS:
                    capacity_exceeded = True
                    logger.warning(f"Wrap limit reached ({MAX_WRAP_ROWS} wraps), truncating spooling")
                    break

                wrap_no += 1
                pre_spooled = min(spooled_m, cable_len_m)
                next_spooled = spooled_m + wrap_len_m
                spooled_after = min(next_spooled, cable_len_m)

                rows.append(WrapRow(
                    wrap_no=wrap_no,
                    layer_no=layer_no,
                    layer_dia_in=layer_dia_in,
                    wrap_len_in=wrap_len_in,
                    pre_spooled_len_m=pre_spooled,
                    spooled_len_m=spooled_after,
                    deployed_len_m=cable_len_m - spooled_after,
                    total_cable_len_m=cable_len_m,
                ))

                spooled_m = next_spooled
                if spooled_m + SPOOL_TOLERANCE_M >= cable_len_m:
                    break

            if capacity_exceeded:
                break

            layer_no += 1
            layer_dia_in += layer_growth_in
    elif cable_len_m > 0:
        # Nothing can be spooled: no cable diameter or the cable is wider than the drum
        capacity_exceeded = True

    spooled_total_m = min(spooled_m, cable_len_m)
    shortfall_m = cable_len_m - spooled_total_m if capacity_exceeded else 0.0

    if capacity_exceeded:
        logger.info(f"Drum capacity exceeded: {spooled_total_m:.1f} of {cable_len_m:.1f} m spooled")

    summary = SpoolSummary(
        total_layers=rows[-1].layer_no if rows else 0,
        full_drum_dia_in=rows[-1].layer_dia_in if rows else bare_drum_dia_in,
        total_wraps=wrap_no,
        cable_len_m=cable_len_m,
        spooled_len_m=spooled_total_m,
        shortfall_m=shortfall_m,
        capacity_exceeded=capacity_exceeded,
        drum_capacity_m=drum_capacity_m(
            bare_drum_dia_in, layer_growth_in, wraps_used, cable_dia_in, flange_dia_in
        ),
    )

    meta = SpoolMeta(
        cable_dia_in=cable_dia_in,
        effective_core_dia_in=effective_core_dia_in,
        bare_drum_dia_in=bare_drum_dia_in,
        wraps_per_layer_calc=wraps_calc,
        wraps_per_layer_override=override,
        wraps_per_layer_used=wraps_used,
        packing_factor_used=packing_factor,
        layer_growth_in=layer_growth_in,
        flange_dia_in=flange_dia_in,
        capacity_exceeded=capacity_exceeded,
    )

    logger.debug(f"Spooled {wrap_no} wraps over {summary.total_layers} layers")
    return rows, summary, meta
