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

from rtchallenge.misc import EPSILON, are_close, clamp


@dataclass
class Color:
    """An amount of red, green and blue light

    Components are not limited to [0, 1]: the sum of several lights can exceed 1, and only
    :meth:`.Color.clamp` brings a color back into the range a canvas can store."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other):
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other):
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other):
        """Blend two colors component by component, or scale a color by a number"""
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)

        return Color(self.r * other, self.g * other, self.b * other)

    def clamp(self):
        """Return a copy of the color with all the components in the range [0, 1]"""
        return Color(clamp(self.r), clamp(self.g), clamp(self.b))

    def is_close(self, other, epsilon=EPSILON):
        return all(are_close(mine, theirs, epsilon=epsilon)
                   for mine, theirs in ((self.r, other.r), (self.g, other.g), (self.b, other.b)))


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
