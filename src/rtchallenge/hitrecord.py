# -*- encoding: utf-8 -*-
#
# The MIT License (MIT)
#
# Copyright © 2021 Maurizio Tomasi
#
# Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
# documentation files (the “Software”), to deal in the Software without restriction, including without limitation the
# rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all copies or substantial portions of
# the Software. THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT NOT
# LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT
# SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF
# CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

from dataclasses import dataclass
from math import sqrt
from typing import List, Optional, Union

from rtchallenge.geometry import Tuple, reflect
from rtchallenge.misc import EPSILON
from rtchallenge.ray import Ray


@dataclass
class Intersection:
    """A hit of a ray against a shape

    `t` is the position of the hit along the ray, in units of the length of the ray direction.
    Negative values of `t` mean that the shape is behind the origin of the ray."""
    t: float
    shape: "Shape"


def intersections(*xs: Intersection) -> List[Intersection]:
    """Return a list of intersections sorted by increasing `t`"""
    return sorted(xs, key=lambda x: x.t)


def hit(xs: List[Intersection], epsilon=EPSILON) -> Union[Intersection, None]:
    """Return the visible intersection in `xs`, or ``None``

    The visible intersection is the one with the smallest `t` greater than `epsilon`: hits behind
    the origin of the ray or too close to it are ignored."""
    closest = None
    for x in xs:
        if x.t > epsilon and ((not closest) or (x.t < closest.t)):
            closest = x

    return closest


@dataclass
class HitRecord:
    """
    A class holding the information needed to shade a ray-shape intersection

    The parameters defined in this dataclass are the following:

    -   `t`: the distance from the origin of the ray where the hit happened
    -   `shape`: the shape that was hit
    -   `world_point`: the world coordinates of the hit point
    -   `eyev`: a vector pointing from the hit point back towards the origin of the ray
    -   `normal`: the normal to the surface, always facing `eyev`
    -   `inside`: True if the ray hit the surface from inside the shape (so that the normal was flipped)
    -   `over_point`: `world_point` nudged along the normal, used to cast shadow and reflected rays
    -   `under_point`: `world_point` nudged against the normal, used to cast refracted rays
    -   `reflectv`: the direction of the incoming ray mirrored around the normal
    -   `n1`, `n2`: the refractive indices of the media on the two sides of the surface
    -   `ray`: the ray that hit the surface
    """
    t: float
    shape: "Shape"
    world_point: Tuple
    eyev: Tuple
    normal: Tuple
    inside: bool
    over_point: Tuple
    under_point: Tuple
    reflectv: Tuple
    n1: float
    n2: float
    ray: Ray


def _refractive_indices(the_hit: Intersection, xs: List[Intersection]):
    """Return the refractive indices (n1, n2) on the two sides of the surface at `the_hit`

    The function walks the intersections in order, tracking which shapes contain the current
    position of the ray."""
    containers = []
    n1, n2 = 1.0, 1.0

    for x in xs:
        if x is the_hit:
            n1 = containers[-1].material.refractive_index if containers else 1.0

        # Compare identities, so that two equal-looking shapes are never confused
        index = next((i for i, shape in enumerate(containers) if shape is x.shape), None)
        if index is not None:
            del containers[index]
        else:
            containers.append(x.shape)

        if x is the_hit:
            n2 = containers[-1].material.refractive_index if containers else 1.0
            break

    return n1, n2


def prepare_computations(the_hit: Intersection, ray: Ray, xs: Optional[List[Intersection]] = None,
                         epsilon=EPSILON) -> HitRecord:
    """Precompute the quantities needed to shade the intersection `the_hit`

    The list `xs` contains all the intersections of `ray` with the world, sorted by `t`: it is
    used to find the refractive indices on each side of the surface. If it is ``None``, the
    hit is assumed to be the only intersection."""
    if xs is None:
        xs = [the_hit]

    world_point = ray.at(the_hit.t)
    eyev = -ray.direction
    normal = the_hit.shape.normal_at(world_point, the_hit)

    inside = normal.dot(eyev) < 0.0
    if inside:
        normal = -normal

    n1, n2 = _refractive_indices(the_hit, xs)

    return HitRecord(
        t=the_hit.t,
        shape=the_hit.shape,
        world_point=world_point,
        eyev=eyev,
        normal=normal,
        inside=inside,
        over_point=world_point + normal * epsilon,
        under_point=world_point - normal * epsilon,
        reflectv=reflect(ray.direction, normal),
        n1=n1,
        n2=n2,
        ray=ray,
    )


def schlick(record: HitRecord) -> float:
    """Return the fraction of light reflected at the hit, using Schlick's approximation

    The result is 1.0 when the ray undergoes total internal reflection."""
    cos_i = record.eyev.dot(record.normal)

    if record.n1 > record.n2:
        n = record.n1 / record.n2
        sin2_t = n * n * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            return 1.0

        cos_i = sqrt(1.0 - sin2_t)

    r0 = ((record.n1 - record.n2) / (record.n1 + record.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos_i) ** 5
