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

"""A Whitted-style ray tracer"""

from rtchallenge.camera import Camera
from rtchallenge.canvas import Canvas
from rtchallenge.colors import Color, BLACK, WHITE
from rtchallenge.config import RenderConfig
from rtchallenge.geometry import Tuple, DegenerateVector, point, vector, reflect
from rtchallenge.lights import PointLight
from rtchallenge.materials import Material, InvalidMaterialParameters
from rtchallenge.patterns import (
    SolidPattern,
    StripePattern,
    GradientPattern,
    RingPattern,
    CheckersPattern,
    BlendedPattern,
)
from rtchallenge.ray import Ray
from rtchallenge.render import WhittedRenderer, lighting, render
from rtchallenge.shapes import (
    InvalidShapeParameters,
    Sphere,
    Plane,
    Cube,
    Cylinder,
    Cone,
    Triangle,
    Group,
)
from rtchallenge.transformations import (
    NonInvertibleTransform,
    Transformation,
    translation,
    scaling,
    rotation_x,
    rotation_y,
    rotation_z,
    shearing,
    view_transform,
)
from rtchallenge.world import World

__version__ = "0.1.0"
