"""Common helpers shared by renderer implementations."""
from __future__ import annotations

from typing import Dict

from ods_reader.model.elements import HorizontalAlign, MaterializedCell, Rgba, VerticalAlign

_TEXT_ALIGN = {
    HorizontalAlign.START: "left",
    HorizontalAlign.CENTER: "center",
    HorizontalAlign.END: "right",
}


def rgba_to_css(color: Rgba) -> str:
    return f"rgba({color.r}, {color.g}, {color.b}, {color.a / 255:g})"


def cell_to_css(cell: MaterializedCell) -> Dict[str, str]:
    """Convert the resolved attributes of a cell into CSS properties."""
    css: Dict[str, str] = {}
    if cell.width:
        css["width"] = f"{cell.width:g}mm"
    if cell.height:
        css["height"] = f"{cell.height:g}mm"
    if cell.padding:
        css["padding"] = f"{cell.padding:g}mm"
    if cell.font_name:
        css["font-family"] = f"'{cell.font_name}'"
    if cell.font_size:
        css["font-size"] = f"{cell.font_size:g}pt"
    if cell.font_weight:
        css["font-weight"] = cell.font_weight
    if cell.font_color != Rgba(0, 0, 0, 255):
        css["color"] = rgba_to_css(cell.font_color)
    if cell.background_color != Rgba(0, 0, 0, 255):
        css["background-color"] = rgba_to_css(cell.background_color)
    if cell.align in _TEXT_ALIGN:
        css["text-align"] = _TEXT_ALIGN[cell.align]
    if cell.vertical_align is not VerticalAlign.UNSET:
        css["vertical-align"] = cell.vertical_align.value
    return css
