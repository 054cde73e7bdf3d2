"""Matplotlib-based previews of images and scene layouts.

Features:
    - Exposure scaling and gamma correction of linear images
    - Image preview window
    - Top-down plot of a composed scene: room outline, placed objects,
      lights with their focus spheres, and the camera

Example:
    >>> from src.scenesynth.preview.display import show_layout
    >>> show_layout(scene)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from src.scenesynth.scene.composer import SceneComposition


def apply_gamma(image: npt.ArrayLike, gamma: float = 2.2) -> npt.NDArray[np.float32]:
    """Encode a linear image with a 1/gamma power curve.

    Values are clamped to [0, 1] first, so negative radiance from noisy
    renders cannot turn into NaN. A gamma of 1.0 leaves values unclamped.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    encoded = np.asarray(image, dtype=np.float32)
    if gamma != 1.0:
        encoded = np.power(np.clip(encoded, 0.0, 1.0), 1.0 / gamma)
    return encoded.astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
    scale: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Scale, gamma correct and clamp a linear image.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 2.2 for sRGB).
        scale: Brightness factor applied before gamma, e.g. from
            preview.exposure.brightness_scale().

    Returns:
        Processed image ready for display, in [0, 1] range.
    """
    scaled = np.asarray(image, dtype=np.float32) * np.float32(scale)
    return np.clip(apply_gamma(scaled, gamma), 0.0, 1.0).astype(np.float32)


def show_image(
    image: npt.NDArray[np.float32],
    *,
    gamma: float = 2.2,
    scale: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a linear image in a Matplotlib window."""
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(process_image_for_display(image, gamma=gamma, scale=scale))
    ax.axis("off")
    ax.set_title(title if title is not None else f"Preview (x{scale:.2f})")

    plt.tight_layout()
    plt.show(block=block)


def plot_layout(scene: SceneComposition, ax: Axes | None = None) -> Axes:
    """Draw a top-down (X/Y) view of a composed scene.

    Args:
        scene: The composition to draw.
        ax: Axes to draw into; a new figure is created when omitted.

    Returns:
        The axes drawn into.
    """
    import matplotlib.pyplot as plt
    from matplotlib.patches import Circle, Rectangle

    from src.scenesynth.geometry.mesh import Mesh
    from src.scenesynth.scene.composer import ObjectKind

    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(4, 8))

    for obj in scene.objects:
        if obj.kind == ObjectKind.BACKDROP:
            continue
        bounds = obj.geometry.bounds()
        lo, extent = bounds.min, bounds.extent
        if obj.kind == ObjectKind.MESH and isinstance(obj.geometry, Mesh):
            ax.add_patch(
                Rectangle(
                    (lo[0], lo[1]), extent[0], extent[1],
                    facecolor=obj.material.albedo, edgecolor="black", alpha=0.6,
                )
            )
        elif obj.kind == ObjectKind.LIGHT:
            ax.add_patch(
                Rectangle(
                    (lo[0], lo[1]), extent[0], extent[1],
                    facecolor="gold", edgecolor="orange",
                )
            )

    for point in scene.tracer.focus_points:
        ax.add_patch(
            Circle(
                (point.center[0], point.center[1]), point.radius,
                fill=False, linestyle="--", edgecolor="orange",
            )
        )

    room = None
    backdrop = [obj.geometry for obj in scene.objects if obj.kind == ObjectKind.BACKDROP]
    if backdrop:
        lows = np.min([m.min() for m in backdrop], axis=0)
        highs = np.max([m.max() for m in backdrop], axis=0)
        room = (lows, highs)
        ax.add_patch(
            Rectangle(
                (lows[0], lows[1]), highs[0] - lows[0], highs[1] - lows[1],
                fill=False, edgecolor="gray", linewidth=2,
            )
        )

    camera = scene.tracer.camera
    direction = camera.direction
    ax.plot([camera.origin[0]], [camera.origin[1]], marker="^", color="blue")
    ax.annotate(
        "",
        xy=(camera.origin[0] + direction[0], camera.origin[1] + direction[1]),
        xytext=(camera.origin[0], camera.origin[1]),
        arrowprops={"arrowstyle": "->", "color": "blue"},
    )

    if room is not None:
        margin = 0.1
        ax.set_xlim(room[0][0] - margin, room[1][0] + margin)
        ax.set_ylim(room[0][1] - margin, room[1][1] + margin)
    ax.set_aspect("equal")
    ax.set_xlabel("x (width)")
    ax.set_ylabel("y (depth)")
    ax.set_title(
        f"{len(scene.objects_of_kind(ObjectKind.MESH))} objects, "
        f"{len(scene.objects_of_kind(ObjectKind.LIGHT))} lights, "
        f"fov {np.degrees(camera.fov):.0f} deg"
    )
    return ax


def show_layout(scene: SceneComposition, *, block: bool = True) -> None:
    """Display the top-down layout plot in a Matplotlib window."""
    import matplotlib.pyplot as plt

    plot_layout(scene)
    plt.tight_layout()
    plt.show(block=block)


def save_layout(scene: SceneComposition, filepath: str) -> None:
    """Save the top-down layout plot to an image file."""
    import matplotlib.pyplot as plt

    ax = plot_layout(scene)
    fig = ax.get_figure()
    fig.tight_layout()
    fig.savefig(filepath)
    plt.close(fig)
