"""Bodies the robot shares its scene with: the field ground and the ball."""

from typing import Optional, Tuple

from .config import EnvironmentSettings, FieldDimensions
from .core.descriptors import Box, Sphere
from .core.scene_graph import CompoundShape, EnvironmentBody
from .groups import ENVIRONMENT, FREE_OBJECT
from .transforms.frame import Origin, ResolvedFrame, compose


def ground_half_extents(field_dimensions: FieldDimensions,
                        half_thickness: float) -> Tuple[float, float, float]:
    """Half extents of the ground slab, including the border strip on every side."""
    length = field_dimensions.length + field_dimensions.border_strip_width * 2.0
    width = field_dimensions.width + field_dimensions.border_strip_width * 2.0
    return (length / 2.0, width / 2.0, half_thickness)


def compile_environment(
    field_dimensions: Optional[FieldDimensions] = None,
    settings: Optional[EnvironmentSettings] = None,
) -> Tuple[EnvironmentBody, ...]:
    """Build the static ground and the dynamic ball."""
    field_dimensions = field_dimensions or FieldDimensions()
    settings = settings or EnvironmentSettings()

    ground = EnvironmentBody(
        name="field",
        dynamic=False,
        frame=compose(Origin(xyz=(0.0, 0.0, settings.ground_height))),
        collider=CompoundShape(
            frames=(ResolvedFrame.identity(),),
            primitives=(Box(ground_half_extents(field_dimensions, settings.ground_half_thickness)),),
        ),
        groups=ENVIRONMENT,
    )
    ball = EnvironmentBody(
        name="ball",
        dynamic=True,
        frame=compose(Origin(xyz=(0.0, 0.0, settings.ball_spawn_height))),
        collider=CompoundShape(
            frames=(ResolvedFrame.identity(),),
            primitives=(Sphere(field_dimensions.ball_radius),),
        ),
        groups=FREE_OBJECT,
        restitution=settings.ball_restitution,
    )
    return ground, ball
