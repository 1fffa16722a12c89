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
from dataclasses import dataclass

from rtchallenge.misc import are_close, EPSILON


class DegenerateVector(Exception):
    """Raised when a zero-length tuple is normalized"""

    def __init__(self, error_message):
        super().__init__(error_message)


@dataclass
class Tuple:
    """A homogeneous 4D tuple

    This class has four floating-point fields: `x`, `y`, `z`, and `w`. Points have
    ``w == 1``, vectors have ``w == 0``; use :func:`.point` and :func:`.vector` to build them.
    The `w` component follows the usual algebra, so that the difference of two points is a
    vector and the sum of a point and a vector is a point."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def is_point(self):
        return self.w == 1.0

    def is_vector(self):
        return self.w == 0.0

    def is_close(self, other, epsilon=EPSILON):
        """Return True if the four components of `self` and `other` differ by less than `epsilon`"""
        assert isinstance(other, Tuple)
        return (are_close(self.x, other.x, epsilon=epsilon) and
                are_close(self.y, other.y, epsilon=epsilon) and
                are_close(self.z, other.z, epsilon=epsilon) and
                are_close(self.w, other.w, epsilon=epsilon))

    def __add__(self, other):
        if isinstance(other, Tuple):
            return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)
        else:
            raise TypeError(f"Unable to run Tuple.__add__ on a {type(self)} and a {type(other)}.")

    def __sub__(self, other):
        if isinstance(other, Tuple):
            return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)
        else:
            raise TypeError(f"Unable to run Tuple.__sub__ on a {type(self)} and a {type(other)}.")

    def __mul__(self, scalar):
        """Multiply each component by a scalar"""
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    def __truediv__(self, scalar):
        return Tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def __neg__(self):
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __getitem__(self, item):
        """Return the i-th component of the tuple, starting from 0"""
        assert (item >= 0) and (item < 4), f"wrong tuple index {item}"
        return (self.x, self.y, self.z, self.w)[item]

    def squared_magnitude(self):
        """Return the squared length of the tuple

        This is faster than :meth:`.Tuple.magnitude` if you just need the squared value."""
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def magnitude(self):
        return math.sqrt(self.squared_magnitude())

    def normalize(self):
        """Return a tuple with the same direction and unit length

        Raise :class:`.DegenerateVector` if the tuple has zero length."""
        norm = self.magnitude()
        if norm == 0.0:
            raise DegenerateVector(f"unable to normalize the zero-length tuple {self}")

        return Tuple(self.x / norm, self.y / norm, self.z / norm, self.w / norm)

    def dot(self, other):
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other):
        """Compute the cross (outer) product between two vectors"""
        if not (self.is_vector() and other.is_vector()):
            raise TypeError("the cross product is only defined for vectors")

        return vector(self.y * other.z - self.z * other.y,
                      self.z * other.x - self.x * other.z,
                      self.x * other.y - self.y * other.x)


def point(x, y, z):
    """Return a :class:`.Tuple` representing a point in 3D space"""
    return Tuple(x, y, z, 1.0)


def vector(x, y, z):
    """Return a :class:`.Tuple` representing a direction in 3D space"""
    return Tuple(x, y, z, 0.0)


def reflect(in_dir, normal):
    """Reflect `in_dir` around `normal`

    `normal` must be normalized for the result to keep the length of `in_dir`."""
    return in_dir - normal * (2.0 * in_dir.dot(normal))


ORIGIN = point(0.0, 0.0, 0.0)
VEC_X = vector(1.0, 0.0, 0.0)
VEC_Y = vector(0.0, 1.0, 0.0)
VEC_Z = vector(0.0, 0.0, 1.0)
