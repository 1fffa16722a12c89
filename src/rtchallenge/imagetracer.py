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
from concurrent.futures import ThreadPoolExecutor
from time import process_time

from rtchallenge.canvas import Canvas
from rtchallenge.camera import Camera


class ImageTracer:
    """Trace an image by shooting light rays through each of its pixels
    """

    def __init__(self, canvas: Canvas, camera: Camera):
        """Initialize an ImageTracer object

        The parameter `canvas` must be a :class:`.Canvas` object that has already been initialized,
        with the same size as the screen of `camera`."""
        if (canvas.width, canvas.height) != (camera.hsize, camera.vsize):
            raise ValueError(
                f"the canvas ({canvas.width}×{canvas.height}) and the camera "
                f"({camera.hsize}×{camera.vsize}) have different sizes"
            )

        self.canvas = canvas
        self.camera = camera

    def fire_ray(self, col: int, row: int):
        """Shoot one light ray through the center of image pixel (col, row)

        The parameters (col, row) are measured in the same way as they are in :class:`.Canvas`: the top left
        corner is placed at (0, 0)."""
        return self.camera.ray_for_pixel(col, row)

    def _trace_row(self, func, row: int):
        for col in range(self.canvas.width):
            self.canvas.set_pixel(col, row, func(self.fire_ray(col, row)))

        return row

    def fire_all_rays(self, func, callback=None, callback_time_s: float = 2.0, workers: int = 1,
                      **callback_kwargs):
        """Shoot several light rays crossing each of the pixels in the image

        For each pixel in the :class:`.Canvas` object fire one ray, and pass it to the function `func`, which
        must accept a :class:`.Ray` as its only parameter and must return a :class:`.Color` instance telling the
        color to assign to that pixel in the image.

        If `workers` is greater than one, the rows of the image are split among a pool of threads;
        each row is written by exactly one thread. The function `callback`, if provided, is called with
        the number of completed rows at most once every `callback_time_s` seconds."""
        last_call_time = process_time()
        if callback:
            callback(0, **callback_kwargs)

        def rows_done():
            if workers > 1:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    yield from executor.map(lambda row: self._trace_row(func, row), range(self.canvas.height))
            else:
                for row in range(self.canvas.height):
                    yield self._trace_row(func, row)

        for num_of_rows, _ in enumerate(rows_done(), start=1):
            current_time = process_time()
            if callback and (current_time - last_call_time > callback_time_s):
                callback(num_of_rows, **callback_kwargs)
                last_call_time = current_time
