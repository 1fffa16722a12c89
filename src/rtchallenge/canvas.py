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

from rtchallenge.colors import Color
from rtchallenge.misc import clamp

# Plain PPM files should not contain lines longer than this
_PPM_MAX_LINE_LENGTH = 70


def _to_byte(x: float) -> int:
    """Convert a color component into an integer in the range 0…255"""
    return clamp(int(math.floor(x * 255 + 0.5)), 0, 255)


class Canvas:
    """A 2D grid of colors

    This class has the following members:

    -   `width` (int): number of columns in the 2D matrix of colors
    -   `height` (int): number of rows in the 2D matrix of colors
    -   `pixels` (array of `Color`): the 2D matrix, represented as a 1D array

    Pixels are stored row by row, so different threads can fill different rows at the same time.
    """

    def __init__(self, width=0, height=0):
        """Create a black canvas with the specified resolution"""
        (self.width, self.height) = (width, height)
        self.pixels = [Color() for i in range(self.width * self.height)]

    def valid_coordinates(self, x, y):
        """Return True if ``(x, y)`` are coordinates within the 2D matrix"""
        return ((x >= 0) and (x < self.width) and
                (y >= 0) and (y < self.height))

    def pixel_offset(self, x, y):
        """Return the position in the 1D array of the specified pixel"""
        return y * self.width + x

    def get_pixel(self, x, y):
        """Return the `Color` value for a pixel in the canvas

        The pixel at the top-left corner has coordinates (0, 0)."""
        assert self.valid_coordinates(x, y)
        return self.pixels[self.pixel_offset(x, y)]

    def set_pixel(self, x, y, new_color):
        """Set the new color for a pixel in the canvas

        The pixel at the top-left corner has coordinates (0, 0)."""
        assert self.valid_coordinates(x, y)
        self.pixels[self.pixel_offset(x, y)] = new_color

    def to_ppm(self) -> str:
        """Return the canvas as the text of a plain («P3») PPM file

        Colors are clamped to the range [0, 1] and scaled to 0…255."""
        lines = ["P3", f"{self.width} {self.height}", "255"]

        for y in range(self.height):
            line = ""
            for x in range(self.width):
                color = self.get_pixel(x, y)
                for component in (color.r, color.g, color.b):
                    value = str(_to_byte(component))
                    if not line:
                        line = value
                    elif len(line) + 1 + len(value) > _PPM_MAX_LINE_LENGTH:
                        lines.append(line)
                        line = value
                    else:
                        line += " " + value

            if line:
                lines.append(line)

        return "\n".join(lines) + "\n"

    def write_ppm(self, stream):
        """Write the canvas in a PPM file

        The `stream` parameter must be a binary I/O stream."""
        stream.write(self.to_ppm().encode("ascii"))

    def write_ldr_image(self, stream, format, gamma=1.0):
        """Save the canvas in a LDR format supported by Pillow (PNG, JPEG, …)

        Colors are clamped to the range [0, 1] before being gamma-corrected.
        """
        from PIL import Image
        img = Image.new("RGB", (self.width, self.height))

        for y in range(self.height):
            for x in range(self.width):
                cur_color = self.get_pixel(x, y).clamp()
                img.putpixel(xy=(x, y), value=(
                    int(255 * math.pow(cur_color.r, 1 / gamma)),
                    int(255 * math.pow(cur_color.g, 1 / gamma)),
                    int(255 * math.pow(cur_color.b, 1 / gamma)),
                ))

        img.save(stream, format=format)
