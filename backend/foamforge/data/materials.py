"""Static foam material reference."""

from __future__ import annotations

from foamforge.models.responses import MaterialInfo

MATERIALS: tuple[MaterialInfo, ...] = (
    MaterialInfo(
        id="eps",
        name="Expanded Polystyrene (EPS)",
        density="Low (15-30 kg/m³)",
        melt_point="~240°C",
        best_for="Prototyping, Scenery, Large volumes",
        cutting_speed="Fast",
        wire_temp="Low to Medium",
    ),
    MaterialInfo(
        id="xps",
        name="Extruded Polystyrene (XPS)",
        density="Medium (25-45 kg/m³)",
        melt_point="~90-100°C (Softens)",
        best_for="RC Wings, Detailed props, Structural core",
        cutting_speed="Medium",
        wire_temp="Medium",
    ),
    MaterialInfo(
        id="epp",
        name="Expanded Polypropylene (EPP)",
        density="Medium-High",
        melt_point="~165°C",
        best_for="Crash-resistant RC planes, Bumpers",
        cutting_speed="Slow",
        wire_temp="High",
    ),
)


def get_material(material_id: str) -> MaterialInfo | None:
    return next((m for m in MATERIALS if m.id == material_id), None)
