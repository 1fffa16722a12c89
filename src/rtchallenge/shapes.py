# -*- encoding: utf-8 -*-
#
# The MIT License (MIT)
#
# Copyright © 2021 Maurizio Tomasi
#
# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the “Software”), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software. THE
# SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS
# OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import weakref
from math import inf, sqrt
from typing import List, Optional

from rtchallenge.bounds import BoundingBox, slab_intersection
from rtchallenge.geometry import DegenerateVector, Tuple, point, vector
from rtchallenge.hitrecord import Intersection
from rtchallenge.materials import Material
from rtchallenge.misc import EPSILON
from rtchallenge.ray import Ray
from rtchallenge.transformations import Transformation


class InvalidShapeParameters(Exception):
    """Raised when a shape is created with inconsistent parameters"""

    def __init__(self, error_message):
        super().__init__(error_message)


class Shape:
    """A generic 3D shape

    This is an abstract class, and you should only use it to derive
    concrete classes. Be sure to redefine the methods
    :meth:`.Shape.local_intersect`, :meth:`.Shape.local_normal_at`
    and :meth:`.Shape.bounds`, which work in object space.

    A shape may belong to a :class:`.Group`; the reference to the
    group is weak, as the group is the owner of its children.

    """

    def __init__(self, transformation: Transformation = Transformation(),
                 material: Optional[Material] = None):
        """Create a shape, potentially associating a transformation to it"""
        self._parent = None
        self.transformation = transformation
        self.material = material if material else Material()

    @property
    def transformation(self) -> Transformation:
        return self._transformation

    @transformation.setter
    def transformation(self, transformation: Transformation):
        self._transformation = transformation
        self._invalidate_parent_bounds()

    def _invalidate_parent_bounds(self):
        # The bounding box of the enclosing group depends on where this shape is and how large it is
        parent = self.parent
        if parent:
            parent._invalidate_bounds()

    @property
    def parent(self) -> Optional["Group"]:
        """The group containing this shape, or ``None``"""
        return self._parent() if self._parent else None

    @parent.setter
    def parent(self, group: Optional["Group"]):
        self._parent = weakref.ref(group) if group else None

    def intersect(self, ray: Ray) -> List[Intersection]:
        """Compute the intersections between a ray in world (or parent) space and this shape

        The result is sorted by increasing `t`, and it includes the intersections behind the
        origin of the ray."""
        return self.local_intersect(ray.transform(self.transformation.inverse()))

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        """Compute the intersections between a ray in object space and this shape"""
        raise NotImplementedError(
            "Shape.local_intersect is an abstract method and cannot be called directly"
        )

    def normal_at(self, world_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        """Return the normalized surface normal at a point in world coordinates"""
        local_point = self.world_to_object(world_point)
        local_normal = self.local_normal_at(local_point, hit)
        return self.normal_to_world(local_normal)

    def local_normal_at(self, local_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        raise NotImplementedError(
            "Shape.local_normal_at is an abstract method and cannot be called directly"
        )

    def world_to_object(self, world_point: Tuple) -> Tuple:
        """Convert a point from world space to object space, through all the enclosing groups"""
        parent = self.parent
        if parent:
            world_point = parent.world_to_object(world_point)

        return self.transformation.inverse() * world_point

    def normal_to_world(self, normal: Tuple) -> Tuple:
        """Convert a normal from object space to world space, through all the enclosing groups"""
        normal = self.transformation.transform_normal(normal).normalize()

        parent = self.parent
        if parent:
            normal = parent.normal_to_world(normal)

        return normal

    def bounds(self) -> BoundingBox:
        """Return the bounding box of the shape in object space"""
        raise NotImplementedError(
            "Shape.bounds is an abstract method and cannot be called directly"
        )

    def parent_space_bounds(self) -> BoundingBox:
        """Return the bounding box of the shape in the space of its parent"""
        return self.bounds().transform(self.transformation)


class Sphere(Shape):
    """A 3D unit sphere centered on the origin of the axes"""

    def __init__(self, transformation: Transformation = Transformation(),
                 material: Optional[Material] = None):
        """Create a unit sphere, potentially associating a transformation to it"""
        super().__init__(transformation, material)

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        """Checks if a ray intersects the sphere

        Return a list with two intersections (possibly at the same `t`, if the ray is tangent
        to the sphere), or an empty list.
        """
        origin_vec = ray.origin - point(0.0, 0.0, 0.0)
        a = ray.direction.squared_magnitude()
        b = 2.0 * origin_vec.dot(ray.direction)
        c = origin_vec.squared_magnitude() - 1.0

        delta = b * b - 4.0 * a * c
        if delta < 0.0:
            return []

        sqrt_delta = sqrt(delta)
        tmin = (-b - sqrt_delta) / (2.0 * a)
        tmax = (-b + sqrt_delta) / (2.0 * a)

        return [Intersection(tmin, self), Intersection(tmax, self)]

    def local_normal_at(self, local_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        return vector(local_point.x, local_point.y, local_point.z)

    def bounds(self) -> BoundingBox:
        return BoundingBox(point(-1.0, -1.0, -1.0), point(1.0, 1.0, 1.0))


class Plane(Shape):
    """A 3D infinite plane parallel to the x and z axis and passing through the origin"""

    def __init__(self, transformation: Transformation = Transformation(),
                 material: Optional[Material] = None):
        """Create a xz plane, potentially associating a transformation to it"""
        super().__init__(transformation, material)

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        if abs(ray.direction.y) < EPSILON:
            return []

        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self)]

    def local_normal_at(self, local_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        return vector(0.0, 1.0, 0.0)

    def bounds(self) -> BoundingBox:
        return BoundingBox(point(-inf, 0.0, -inf), point(inf, 0.0, inf))


class Cube(Shape):
    """An axis-aligned cube spanning the range [-1, 1] along every axis"""

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        tmin, tmax = slab_intersection(ray, point(-1.0, -1.0, -1.0), point(1.0, 1.0, 1.0))
        if tmin > tmax:
            return []

        return [Intersection(tmin, self), Intersection(tmax, self)]

    def local_normal_at(self, local_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        abs_x, abs_y, abs_z = abs(local_point.x), abs(local_point.y), abs(local_point.z)
        maxc = max(abs_x, abs_y, abs_z)

        if maxc == abs_x:
            return vector(local_point.x, 0.0, 0.0)
        elif maxc == abs_y:
            return vector(0.0, local_point.y, 0.0)

        return vector(0.0, 0.0, local_point.z)

    def bounds(self) -> BoundingBox:
        return BoundingBox(point(-1.0, -1.0, -1.0), point(1.0, 1.0, 1.0))


class _Quadric(Shape):
    """Common code for cylinders and cones, which are truncated along the y axis"""

    def __init__(self, transformation: Transformation = Transformation(),
                 material: Optional[Material] = None,
                 minimum: float = -inf, maximum: float = inf, closed: bool = False):
        self._check_limits(minimum, maximum)
        self._minimum = minimum
        self._maximum = maximum
        self._closed = closed

        super().__init__(transformation, material)

    def _check_limits(self, minimum: float, maximum: float):
        if minimum > maximum:
            raise InvalidShapeParameters(
                f"{type(self).__name__}: the minimum ({minimum}) is greater than the maximum ({maximum})"
            )

    @property
    def minimum(self) -> float:
        return self._minimum

    @minimum.setter
    def minimum(self, minimum: float):
        self._check_limits(minimum, self._maximum)
        self._minimum = minimum
        self._invalidate_parent_bounds()

    @property
    def maximum(self) -> float:
        return self._maximum

    @maximum.setter
    def maximum(self, maximum: float):
        self._check_limits(self._minimum, maximum)
        self._maximum = maximum
        self._invalidate_parent_bounds()

    @property
    def closed(self) -> bool:
        """Whether the ends of the shape are capped"""
        return self._closed

    @closed.setter
    def closed(self, closed: bool):
        self._closed = closed
        self._invalidate_parent_bounds()

    def _cap_radius(self, y: float) -> float:
        raise NotImplementedError(
            "_Quadric._cap_radius is an abstract method and cannot be called directly"
        )

    def _body_intersections(self, ray: Ray) -> List[float]:
        raise NotImplementedError(
            "_Quadric._body_intersections is an abstract method and cannot be called directly"
        )

    def _check_cap(self, ray: Ray, t: float, radius: float) -> bool:
        x = ray.origin.x + t * ray.direction.x
        z = ray.origin.z + t * ray.direction.z
        return (x * x + z * z) <= radius * radius

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        xs = []
        for t in self._body_intersections(ray):
            y = ray.origin.y + t * ray.direction.y
            if self.minimum < y < self.maximum:
                xs.append(Intersection(t, self))

        # The caps can only be hit by rays that are not parallel to them
        if self.closed and abs(ray.direction.y) >= EPSILON:
            for bound in (self.minimum, self.maximum):
                t = (bound - ray.origin.y) / ray.direction.y
                if self._check_cap(ray, t, self._cap_radius(bound)):
                    xs.append(Intersection(t, self))

        return sorted(xs, key=lambda x: x.t)


class Cylinder(_Quadric):
    """A cylinder of unit radius around the y axis

    The cylinder is truncated at `minimum` and `maximum` (excluded) along the y axis; if
    `closed` is True, the two ends are capped. The default cylinder is infinite and open."""

    def _cap_radius(self, y: float) -> float:
        return 1.0

    def _body_intersections(self, ray: Ray) -> List[float]:
        a = ray.direction.x * ray.direction.x + ray.direction.z * ray.direction.z

        # Rays parallel to the y axis never cross the body
        if abs(a) < EPSILON:
            return []

        b = 2.0 * (ray.origin.x * ray.direction.x + ray.origin.z * ray.direction.z)
        c = ray.origin.x * ray.origin.x + ray.origin.z * ray.origin.z - 1.0

        delta = b * b - 4.0 * a * c
        if delta < 0.0:
            return []

        sqrt_delta = sqrt(delta)
        return sorted([(-b - sqrt_delta) / (2.0 * a), (-b + sqrt_delta) / (2.0 * a)])

    def local_normal_at(self, local_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        dist = local_point.x * local_point.x + local_point.z * local_point.z

        if dist < 1.0 and local_point.y >= self.maximum - EPSILON:
            return vector(0.0, 1.0, 0.0)
        elif dist < 1.0 and local_point.y <= self.minimum + EPSILON:
            return vector(0.0, -1.0, 0.0)

        return vector(local_point.x, 0.0, local_point.z)

    def bounds(self) -> BoundingBox:
        return BoundingBox(point(-1.0, self.minimum, -1.0), point(1.0, self.maximum, 1.0))


class Cone(_Quadric):
    """A double-napped cone around the y axis, with its apex in the origin

    The radius of the cone at height `y` is `|y|`. As for :class:`.Cylinder`, the cone can be
    truncated with `minimum` and `maximum` and capped with `closed`."""

    def _cap_radius(self, y: float) -> float:
        return abs(y)

    def _body_intersections(self, ray: Ray) -> List[float]:
        origin, direction = ray.origin, ray.direction
        a = direction.x * direction.x - direction.y * direction.y + direction.z * direction.z
        b = 2.0 * (origin.x * direction.x - origin.y * direction.y + origin.z * direction.z)
        c = origin.x * origin.x - origin.y * origin.y + origin.z * origin.z

        if abs(a) < EPSILON:
            # The ray is parallel to one of the halves, so it crosses the other one just once
            if abs(b) < EPSILON:
                return []

            return [-c / (2.0 * b)]

        delta = b * b - 4.0 * a * c
        if delta < 0.0:
            return []

        sqrt_delta = sqrt(delta)
        return sorted([(-b - sqrt_delta) / (2.0 * a), (-b + sqrt_delta) / (2.0 * a)])

    def local_normal_at(self, local_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        dist = local_point.x * local_point.x + local_point.z * local_point.z

        # Every direction is orthogonal to the surface at the apex, so pick the y axis
        if dist < EPSILON * EPSILON and abs(local_point.y) < EPSILON:
            return vector(0.0, 1.0, 0.0)

        if dist < self.maximum * self.maximum and local_point.y >= self.maximum - EPSILON:
            return vector(0.0, 1.0, 0.0)
        elif dist < self.minimum * self.minimum and local_point.y <= self.minimum + EPSILON:
            return vector(0.0, -1.0, 0.0)

        y = sqrt(dist)
        if local_point.y > 0.0:
            y = -y

        return vector(local_point.x, y, local_point.z)

    def bounds(self) -> BoundingBox:
        limit = max(abs(self.minimum), abs(self.maximum))
        return BoundingBox(point(-limit, self.minimum, -limit), point(limit, self.maximum, limit))


class Triangle(Shape):
    """A flat triangle with vertices `p1`, `p2`, and `p3`"""

    def __init__(self, p1: Tuple, p2: Tuple, p3: Tuple,
                 transformation: Transformation = Transformation(),
                 material: Optional[Material] = None):
        super().__init__(transformation, material)
        self.p1, self.p2, self.p3 = p1, p2, p3
        self.e1 = p2 - p1
        self.e2 = p3 - p1

        try:
            self.normal = self.e2.cross(self.e1).normalize()
        except DegenerateVector as e:
            raise InvalidShapeParameters(f"the vertices {p1}, {p2}, {p3} are collinear") from e

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        # Möller–Trumbore algorithm
        dir_cross_e2 = ray.direction.cross(self.e2)
        det = self.e1.dot(dir_cross_e2)
        if abs(det) < EPSILON:
            return []

        f = 1.0 / det
        p1_to_origin = ray.origin - self.p1
        u = f * p1_to_origin.dot(dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return []

        origin_cross_e1 = p1_to_origin.cross(self.e1)
        v = f * ray.direction.dot(origin_cross_e1)
        if v < 0.0 or (u + v) > 1.0:
            return []

        return [Intersection(f * self.e2.dot(origin_cross_e1), self)]

    def local_normal_at(self, local_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        return self.normal

    def bounds(self) -> BoundingBox:
        box = BoundingBox()
        for vertex in (self.p1, self.p2, self.p3):
            box.add_point(vertex)

        return box


class Group(Shape):
    """A collection of shapes sharing a common transformation

    The group owns its children: adding a shape to a group removes it from the group it
    belonged to. Groups have no material of their own, as only their children are ever hit."""

    def __init__(self, transformation: Transformation = Transformation(),
                 children: Optional[List[Shape]] = None):
        super().__init__(transformation)
        self.material = None
        self.children = []
        self._bounds = None

        for child in (children or []):
            self.add_child(child)

    def add_child(self, shape: Shape):
        """Append a shape to this group"""
        old_parent = shape.parent
        if old_parent:
            old_parent.remove_child(shape)

        shape.parent = self
        self.children.append(shape)
        self._invalidate_bounds()

    def remove_child(self, shape: Shape):
        """Remove a shape from this group

        Raise `ValueError` if the shape is not a child of this group."""
        index = next((i for i, child in enumerate(self.children) if child is shape), None)
        if index is None:
            raise ValueError(f"{shape} is not a child of this group")

        del self.children[index]
        shape.parent = None
        self._invalidate_bounds()

    def includes(self, shape: Shape) -> bool:
        """Return True if `shape` is this group or one of its (possibly nested) children"""
        if shape is self:
            return True

        return any(child.includes(shape) if isinstance(child, Group) else child is shape
                   for child in self.children)

    def _invalidate_bounds(self):
        self._bounds = None
        parent = self.parent
        if parent:
            parent._invalidate_bounds()

    def local_intersect(self, ray: Ray) -> List[Intersection]:
        if not self.bounds().intersects(ray):
            return []

        xs = []
        for child in self.children:
            xs.extend(child.intersect(ray))

        return sorted(xs, key=lambda x: x.t)

    def local_normal_at(self, local_point: Tuple, hit: Optional[Intersection] = None) -> Tuple:
        raise NotImplementedError("groups have no surface, so Group.local_normal_at cannot be called")

    def bounds(self) -> BoundingBox:
        if self._bounds is None:
            box = BoundingBox()
            for child in self.children:
                box.add_box(child.parent_space_bounds())

            self._bounds = box

        return self._bounds
