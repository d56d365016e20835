"""
Plotly-based 3D view of the parcels produced for a cart.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

import plotly.graph_objects as go
import plotly.io as pio
from plotly.colors import qualitative

from shipping_estimator.models.parcel import Parcel

DEFAULT_COLOR_SEQUENCE = qualitative.Light24
PARCEL_GAP_CM = 5

# (vertex indices, brightness) for the six faces of a prism
_FACES: Tuple[Tuple[Tuple[int, int, int, int], float], ...] = (
    ((4, 5, 6, 7), 1.0),  # top
    ((0, 1, 5, 4), 0.85),  # front
    ((1, 2, 6, 5), 0.75),  # right
    ((2, 3, 7, 6), 0.75),  # back
    ((3, 0, 4, 7), 0.85),  # left
    ((0, 3, 2, 1), 0.6),  # bottom
)

_EDGES = (
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 0),
    (4, 5),
    (5, 6),
    (6, 7),
    (7, 4),
    (0, 4),
    (1, 5),
    (2, 6),
    (3, 7),
)


def _prism_vertices(x: int, y: int, z: int, dx: int, dy: int, dz: int) -> Tuple[List[int], List[int], List[int]]:
    xs = [x, x + dx, x + dx, x, x, x + dx, x + dx, x]
    ys = [y, y, y + dy, y + dy, y, y, y + dy, y + dy]
    zs = [z, z, z, z, z + dz, z + dz, z + dz, z + dz]
    return xs, ys, zs


def _color_for_index(index: int) -> str:
    return DEFAULT_COLOR_SEQUENCE[index % len(DEFAULT_COLOR_SEQUENCE)]


def _parcel_faces(
    x: int,
    dims: Tuple[int, int, int],
    color: str,
    name: str,
    hover: str,
) -> List[go.Mesh3d]:
    xs, ys, zs = _prism_vertices(x, 0, 0, *dims)
    faces = []
    for vertices, brightness in _FACES:
        faces.append(
            go.Mesh3d(
                x=[xs[v] for v in vertices],
                y=[ys[v] for v in vertices],
                z=[zs[v] for v in vertices],
                i=[0, 0],
                j=[1, 2],
                k=[2, 3],
                color=color,
                opacity=1.0,
                name=name,
                showscale=False,
                flatshading=True,
                lighting=dict(ambient=0.5 + 0.3 * brightness, diffuse=0.8, specular=0.1),
                hovertext=hover,
                hoverinfo="text",
            )
        )
    return faces


def _edge_trace(x: int, dims: Tuple[int, int, int], name: str) -> go.Scatter3d:
    xs, ys, zs = _prism_vertices(x, 0, 0, *dims)
    x_coords: List[float] = []
    y_coords: List[float] = []
    z_coords: List[float] = []
    for start, end in _EDGES:
        x_coords.extend([xs[start], xs[end], None])
        y_coords.extend([ys[start], ys[end], None])
        z_coords.extend([zs[start], zs[end], None])

    return go.Scatter3d(
        x=x_coords,
        y=y_coords,
        z=z_coords,
        mode="lines",
        line=dict(color="#000000", width=2.5),
        name=name,
        showlegend=False,
        hoverinfo="skip",
    )


def parcel_offsets(parcels: Sequence[Parcel], gap: int = PARCEL_GAP_CM) -> List[int]:
    """X origin of each parcel when laid out in a row."""
    offsets: List[int] = []
    cursor = 0
    for parcel in parcels:
        offsets.append(cursor)
        cursor += parcel.length_cm + gap
    return offsets


def parcels_figure(parcels: Sequence[Parcel]) -> go.Figure:
    fig = go.Figure()
    for idx, (parcel, x) in enumerate(zip(parcels, parcel_offsets(parcels))):
        name = f"Parcel {idx + 1}"
        hover = (
            f"{name}<br>{parcel.weight_kg:.3f} kg<br>"
            f"{parcel.length_cm} x {parcel.width_cm} x {parcel.height_cm} cm"
        )
        for trace in _parcel_faces(x, parcel.dimensions, _color_for_index(idx), name, hover):
            fig.add_trace(trace)
        fig.add_trace(_edge_trace(x, parcel.dimensions, name))

    axis_style = dict(
        backgroundcolor="#f2f5fb",
        gridcolor="#cbd5e0",
        zerolinecolor="#a0aec0",
    )
    fig.update_layout(
        title="Parcels",
        scene=dict(
            xaxis_title="Length (cm)",
            yaxis_title="Width (cm)",
            zaxis_title="Height (cm)",
            aspectmode="data",
            xaxis=axis_style,
            yaxis=axis_style,
            zaxis=axis_style,
        ),
        paper_bgcolor="#f7f9fc",
        plot_bgcolor="#f7f9fc",
        showlegend=False,
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def save_figure_image(fig: go.Figure, output_path: str | Path, width: int = 900, height: int = 650) -> None:
    """
    Persist a figure to disk as a static PNG using Kaleido.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pio.write_image(fig, str(output_path), format="png", width=width, height=height, scale=2)
