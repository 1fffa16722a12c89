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

from dataclasses import dataclass, field
from typing import Optional

from rtchallenge.colors import Color
from rtchallenge.geometry import Tuple
from rtchallenge.patterns import Pattern

# Refractive indices of some common media
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.52
DIAMOND = 2.417


class InvalidMaterialParameters(Exception):
    """Raised when a material is created with meaningless coefficients"""

    def __init__(self, error_message):
        super().__init__(error_message)


@dataclass
class Material:
    """The appearance of a surface under the Phong reflection model

    -   `color`: the base color of the surface, used when `pattern` is ``None``
    -   `pattern`: an optional :class:`.Pattern` overriding `color`
    -   `ambient`, `diffuse`, `specular`: weights of the three Phong terms
    -   `shininess`: exponent of the specular term (the larger, the smaller the highlight)
    -   `reflective`: fraction of light mirrored by the surface (0 for matte, 1 for a perfect mirror)
    -   `transparency`: fraction of light transmitted through the surface
    -   `refractive_index`: index of refraction of the medium enclosed by the surface
    """
    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0))
    pattern: Optional[Pattern] = None
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM

    def __post_init__(self):
        for name in ("ambient", "diffuse", "specular", "shininess", "reflective", "transparency"):
            if getattr(self, name) < 0.0:
                raise InvalidMaterialParameters(f"the «{name}» coefficient must not be negative")

        if self.refractive_index <= 0.0:
            raise InvalidMaterialParameters(
                f"invalid refractive index {self.refractive_index}, it must be positive"
            )

    def color_at(self, shape, world_point: Tuple) -> Color:
        """Return the color of the material on `shape` at a point in world coordinates"""
        if self.pattern:
            return self.pattern.pattern_at_shape(shape, world_point)

        return self.color
