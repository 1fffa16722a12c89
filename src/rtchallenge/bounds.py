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

from math import inf, isnan

from rtchallenge.geometry import Tuple, point
from rtchallenge.misc import EPSILON
from rtchallenge.ray import Ray
from rtchallenge.transformations import Transformation


def check_axis(origin: float, direction: float, minimum: float, maximum: float):
    """Return the values of `t` where a ray enters and leaves the slab [minimum, maximum] along one axis

    When the ray is parallel to the slab, the result is either (-∞, +∞) (the origin lies within the
    slab) or an empty interval."""
    tmin_numerator = minimum - origin
    tmax_numerator = maximum - origin

    if abs(direction) >= EPSILON:
        tmin = tmin_numerator / direction
        tmax = tmax_numerator / direction
    else:
        tmin = -inf if tmin_numerator <= 0.0 else inf
        tmax = inf if tmax_numerator >= 0.0 else -inf

    if tmin > tmax:
        tmin, tmax = tmax, tmin

    return tmin, tmax


def slab_intersection(ray: Ray, minimum: Tuple, maximum: Tuple):
    """Intersect a ray with an axis-aligned box

    Return the pair ``(tmin, tmax)``; the ray misses the box if ``tmin > tmax``."""
    xtmin, xtmax = check_axis(ray.origin.x, ray.direction.x, minimum.x, maximum.x)
    ytmin, ytmax = check_axis(ray.origin.y, ray.direction.y, minimum.y, maximum.y)
    ztmin, ztmax = check_axis(ray.origin.z, ray.direction.z, minimum.z, maximum.z)

    return max(xtmin, ytmin, ztmin), min(xtmax, ytmax, ztmax)


class BoundingBox:
    """An axis-aligned bounding box

    A box created without arguments is empty; grow it with :meth:`.BoundingBox.add_point` and
    :meth:`.BoundingBox.add_box`. Boxes may extend to infinity (e.g., the one of a plane)."""

    def __init__(self, minimum=None, maximum=None):
        self.minimum = minimum if minimum else point(inf, inf, inf)
        self.maximum = maximum if maximum else point(-inf, -inf, -inf)

    def __repr__(self):
        return f"BoundingBox(minimum={self.minimum}, maximum={self.maximum})"

    def is_empty(self):
        return (self.minimum.x > self.maximum.x or
                self.minimum.y > self.maximum.y or
                self.minimum.z > self.maximum.z)

    def add_point(self, p: Tuple):
        self.minimum = point(min(self.minimum.x, p.x), min(self.minimum.y, p.y), min(self.minimum.z, p.z))
        self.maximum = point(max(self.maximum.x, p.x), max(self.maximum.y, p.y), max(self.maximum.z, p.z))

    def add_box(self, other: "BoundingBox"):
        if other.is_empty():
            return

        self.add_point(other.minimum)
        self.add_point(other.maximum)

    def contains_point(self, p: Tuple):
        return (self.minimum.x <= p.x <= self.maximum.x and
                self.minimum.y <= p.y <= self.maximum.y and
                self.minimum.z <= p.z <= self.maximum.z)

    def contains_box(self, other: "BoundingBox"):
        return self.contains_point(other.minimum) and self.contains_point(other.maximum)

    def transform(self, transformation: Transformation) -> "BoundingBox":
        """Return the axis-aligned box enclosing this box after `transformation`"""
        if self.is_empty():
            return BoundingBox()

        corners = [point(x, y, z)
                   for x in (self.minimum.x, self.maximum.x)
                   for y in (self.minimum.y, self.maximum.y)
                   for z in (self.minimum.z, self.maximum.z)]

        minimum = [inf, inf, inf]
        maximum = [-inf, -inf, -inf]
        for corner in corners:
            transformed = _transform_point(transformation, corner)
            for axis in range(3):
                value = transformed[axis]
                if isnan(value):
                    # Opposite infinities met along this axis: the box spans all of it
                    minimum[axis], maximum[axis] = -inf, inf
                else:
                    minimum[axis] = min(minimum[axis], value)
                    maximum[axis] = max(maximum[axis], value)

        return BoundingBox(point(*minimum), point(*maximum))

    def intersects(self, ray: Ray) -> bool:
        if self.is_empty():
            return False

        tmin, tmax = slab_intersection(ray, self.minimum, self.maximum)
        return tmin <= tmax


def _transform_point(transformation: Transformation, p: Tuple) -> Tuple:
    # Skip null matrix elements, so that 0 × ∞ does not turn into NaN
    coords = (p.x, p.y, p.z, 1.0)
    return point(*[sum(row[j] * coords[j] for j in range(4) if row[j] != 0.0)
                   for row in transformation.m[:3]])
