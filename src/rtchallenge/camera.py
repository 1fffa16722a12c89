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

import math

from rtchallenge.geometry import point
from rtchallenge.ray import Ray
from rtchallenge.transformations import Transformation


class Camera:
    """A camera implementing a perspective 3D → 2D projection

    The camera sits in the origin and looks towards the negative Z axis, with the screen placed
    one unit in front of it; use `transformation` (typically built with
    :func:`.view_transform`) to move it around the world.
    """

    def __init__(self, hsize: int, vsize: int, field_of_view: float,
                 transformation: Transformation = Transformation()):
        """Create a new camera

        The parameters `hsize` and `vsize` are the number of pixels along the horizontal and
        vertical directions of the image. The parameter `field_of_view` is the angle (in radians)
        covered by the longest side of the image.

        The `transformation` parameter is an instance of the :class:`.Transformation` class
        converting world coordinates into camera coordinates."""
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"invalid camera size {hsize}×{vsize}")

        if not (0.0 < field_of_view < math.pi):
            raise ValueError(f"invalid field of view {field_of_view}, it must be in (0, π)")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transformation = transformation

        half_view = math.tan(field_of_view / 2.0)
        aspect_ratio = hsize / vsize
        if aspect_ratio >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect_ratio
        else:
            self.half_width = half_view * aspect_ratio
            self.half_height = half_view

        self.pixel_size = self.half_width * 2.0 / hsize

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Shoot a ray through the center of pixel (px, py) of the camera's screen

        The pixel (0, 0) is the top-left corner of the image."""
        world_x = self.half_width - (px + 0.5) * self.pixel_size
        world_y = self.half_height - (py + 0.5) * self.pixel_size

        inverse = self.transformation.inverse()
        pixel = inverse * point(world_x, world_y, -1.0)
        origin = inverse * point(0.0, 0.0, 0.0)
        return Ray(origin=origin, direction=(pixel - origin).normalize())
