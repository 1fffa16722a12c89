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

from rtchallenge.colors import Color
from rtchallenge.misc import EPSILON

# Number of bounces followed by reflected and refracted rays
DEFAULT_MAX_DEPTH = 5


@dataclass
class RenderConfig:
    """Settings shared by all the pixels of a rendering

    -   `max_depth`: how many times a ray may be reflected or refracted before its contribution
        is considered black
    -   `epsilon`: the offset applied to hit points before casting secondary rays, which is
        also the minimum distance of a valid hit
    -   `background`: the color of rays that escape the scene
    -   `workers`: number of threads sharing the rows of the image
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    epsilon: float = EPSILON
    background: Color = field(default_factory=Color)
    workers: int = 1

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError(f"invalid maximum depth {self.max_depth}, it must not be negative")

        if self.workers < 1:
            raise ValueError(f"invalid number of workers {self.workers}")
