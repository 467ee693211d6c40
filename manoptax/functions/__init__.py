"""Ready-made oracles for distance-based problems."""

from .costs import (
    distance_proximal_maps,
    mean_distance_cost,
    mean_squared_distance_cost,
    mean_squared_distance_gradient,
)
from .gradients import grad_distance
from .proximal_maps import prox_distance

__all__ = [
    "distance_proximal_maps",
    "grad_distance",
    "mean_distance_cost",
    "mean_squared_distance_cost",
    "mean_squared_distance_gradient",
    "prox_distance",
]
