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

from typing import Union, List

from rtchallenge.geometry import Tuple
from rtchallenge.hitrecord import Intersection, hit
from rtchallenge.lights import PointLight
from rtchallenge.misc import EPSILON
from rtchallenge.ray import Ray
from rtchallenge.shapes import Shape


class World:
    """A class holding a list of shapes and lights, which make a «world»

    You can add shapes to a world using :meth:`.World.add_shape`, and lights using
    :meth:`.World.add_light`. Typically, you call :meth:`.World.ray_intersection` to check
    whether a light ray intersects any of the shapes in the world.

    A world must not be modified while it is being rendered.
    """

    shapes: List[Shape]
    lights: List[PointLight]

    def __init__(self, shapes=None, lights=None):
        self.shapes = list(shapes) if shapes else []
        self.lights = list(lights) if lights else []

    def add_shape(self, shape: Shape):
        """Append a new shape to this world"""
        self.shapes.append(shape)

    def add_light(self, light: PointLight):
        """Append a new point light to this world"""
        self.lights.append(light)

    def intersect(self, ray: Ray) -> List[Intersection]:
        """Return all the intersections between a ray and the shapes in this world, sorted by `t`"""
        xs = []
        for shape in self.shapes:
            xs.extend(shape.intersect(ray))

        return sorted(xs, key=lambda x: x.t)

    def ray_intersection(self, ray: Ray, epsilon=EPSILON) -> Union[Intersection, None]:
        """Determine whether a ray intersects any of the objects in this world

        Return the closest intersection in front of the ray, or ``None``."""
        return hit(self.intersect(ray), epsilon=epsilon)

    def is_shadowed(self, world_point: Tuple, light: PointLight, epsilon=EPSILON) -> bool:
        """Return True if some shape lies between `world_point` and `light`"""
        direction = light.position - world_point
        distance = direction.magnitude()
        if distance == 0.0:
            return False

        closest = self.ray_intersection(Ray(origin=world_point, direction=direction.normalize()),
                                        epsilon=epsilon)
        return bool(closest) and (closest.t < distance)
