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

from __future__ import annotations

from dataclasses import dataclass

from rtchallenge.geometry import Tuple
from rtchallenge.transformations import Transformation


@dataclass
class Ray:
    """A ray of light propagating in space

    The class contains the following members:

    -   `origin` (``Tuple``): the point where the ray originated
    -   `direction` (``Tuple``): the vector along which this ray propagates. It is not
        necessarily normalized, and distances along the ray are measured in units of its length."""

    origin: Tuple
    direction: Tuple

    def is_close(self, other: Ray, epsilon=1e-5):
        """Check if two rays are similar enough to be considered equal"""
        return (self.origin.is_close(other.origin, epsilon=epsilon) and
                self.direction.is_close(other.direction, epsilon=epsilon))

    def at(self, t):
        """Compute the point along the ray's path at some distance from the origin

        Return a point whose distance from the ray's origin is equal to `t`, measured in units
        of the length of `Ray.direction`."""
        return self.origin + self.direction * t

    def transform(self, transformation: Transformation):
        """Transform a ray

        This method returns a new ray whose origin and direction are the transformation of the original ray"""
        return Ray(origin=transformation * self.origin,
                   direction=transformation * self.direction)
