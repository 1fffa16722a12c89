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

from math import floor, sqrt
from typing import Union

from rtchallenge.colors import Color
from rtchallenge.geometry import Tuple
from rtchallenge.transformations import Transformation


class Pattern:
    """A «pattern»

    This abstract class represents a pattern, i.e., a function that associates a color with
    each point in space. Every pattern has its own transformation, which places it relative to
    the shape it decorates. Call the method :meth:`.Pattern.pattern_at_shape` to retrieve the
    color of a shape at some point in world coordinates."""

    def __init__(self, transformation: Transformation = Transformation()):
        self.transformation = transformation

    def pattern_at(self, pattern_point: Tuple) -> Color:
        """Return the color of the pattern at a point expressed in pattern coordinates"""
        raise NotImplementedError("Method Pattern.pattern_at is abstract and cannot be called")

    def pattern_at_shape(self, shape, world_point: Tuple) -> Color:
        """Return the color of the pattern applied to `shape` at a point in world coordinates"""
        object_point = shape.world_to_object(world_point)
        return self.pattern_at(self.transformation.inverse() * object_point)


def _as_pattern(color_or_pattern: Union[Color, Pattern]) -> Pattern:
    if isinstance(color_or_pattern, Pattern):
        return color_or_pattern

    return SolidPattern(color_or_pattern)


def _nested_color(pattern: Pattern, parent_point: Tuple) -> Color:
    # Nested patterns are placed relative to the pattern space of their parent
    return pattern.pattern_at(pattern.transformation.inverse() * parent_point)


class SolidPattern(Pattern):
    """A uniform pattern

    This is the most boring pattern: a uniform hue over the whole space. It is mostly useful
    as a building block of composite patterns."""

    def __init__(self, color=Color()):
        super().__init__()
        self.color = color

    def pattern_at(self, pattern_point: Tuple) -> Color:
        return self.color


class _TwoPartPattern(Pattern):
    """Base class for patterns that alternate between two colors or sub-patterns"""

    def __init__(self, a: Union[Color, Pattern], b: Union[Color, Pattern],
                 transformation: Transformation = Transformation()):
        super().__init__(transformation)
        self.a = _as_pattern(a)
        self.b = _as_pattern(b)


class StripePattern(_TwoPartPattern):
    """Alternating stripes, each one unit wide along the X axis"""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        if floor(pattern_point.x) % 2 == 0:
            return _nested_color(self.a, pattern_point)

        return _nested_color(self.b, pattern_point)


class GradientPattern(_TwoPartPattern):
    """A linear blend from `a` to `b`, repeated every unit along the X axis"""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        color_a = _nested_color(self.a, pattern_point)
        color_b = _nested_color(self.b, pattern_point)
        fraction = pattern_point.x - floor(pattern_point.x)
        return color_a + (color_b - color_a) * fraction


class RingPattern(_TwoPartPattern):
    """Concentric rings around the Y axis, each one unit thick"""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        distance = sqrt(pattern_point.x * pattern_point.x + pattern_point.z * pattern_point.z)
        if floor(distance) % 2 == 0:
            return _nested_color(self.a, pattern_point)

        return _nested_color(self.b, pattern_point)


class CheckersPattern(_TwoPartPattern):
    """A 3D checkerboard made of unit cubes"""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        if (floor(pattern_point.x) + floor(pattern_point.y) + floor(pattern_point.z)) % 2 == 0:
            return _nested_color(self.a, pattern_point)

        return _nested_color(self.b, pattern_point)


class BlendedPattern(_TwoPartPattern):
    """The average of two patterns evaluated at the same point"""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        return (_nested_color(self.a, pattern_point) + _nested_color(self.b, pattern_point)) * 0.5
