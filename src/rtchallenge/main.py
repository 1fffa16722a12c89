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

import logging
import math
from time import process_time
import sys

from rtchallenge.camera import Camera
from rtchallenge.canvas import Canvas
from rtchallenge.colors import Color, WHITE
from rtchallenge.config import RenderConfig, DEFAULT_MAX_DEPTH
from rtchallenge.geometry import point, vector
from rtchallenge.imagetracer import ImageTracer
from rtchallenge.lights import PointLight
from rtchallenge.materials import Material, GLASS
from rtchallenge.patterns import CheckersPattern
from rtchallenge.render import OnOffRenderer, FlatRenderer, render
from rtchallenge.shapes import Sphere, Plane, Cube, Cylinder, Group
from rtchallenge.transformations import translation, scaling, rotation_y, view_transform
from rtchallenge.world import World

import click


def build_demo_world() -> World:
    """Return a small scene with a checkered floor, two spheres, a cube and a capped cylinder"""
    world = World()

    world.add_shape(Plane(material=Material(
        pattern=CheckersPattern(Color(0.9, 0.9, 0.9), Color(0.2, 0.2, 0.3)),
        specular=0.0,
        reflective=0.1,
    )))

    world.add_shape(Sphere(
        transformation=translation(-1.2, 1.0, 0.5),
        material=Material(color=Color(0.1, 0.1, 0.1), diffuse=0.3, reflective=0.9, shininess=300.0),
    ))

    world.add_shape(Sphere(
        transformation=translation(0.8, 0.7, -1.0) * scaling(0.7, 0.7, 0.7),
        material=Material(color=Color(0.05, 0.05, 0.05), diffuse=0.1, reflective=0.9, transparency=0.9,
                          refractive_index=GLASS),
    ))

    # The cube and the cylinder share a group, so they can be moved together
    props = Group(transformation=translation(2.5, 0.0, 2.0) * rotation_y(math.pi / 6))
    props.add_child(Cube(
        transformation=translation(0.0, 0.5, 0.0) * scaling(0.5, 0.5, 0.5),
        material=Material(color=Color(0.8, 0.3, 0.2)),
    ))
    props.add_child(Cylinder(
        transformation=translation(-1.2, 0.0, 0.0) * scaling(0.4, 1.0, 0.4),
        material=Material(color=Color(0.2, 0.6, 0.3)),
        minimum=0.0,
        maximum=1.5,
        closed=True,
    ))
    world.add_shape(props)

    world.add_light(PointLight(position=point(-10.0, 10.0, -10.0), intensity=WHITE))

    return world


RENDERERS = ["onoff", "flat", "whitted"]


@click.group()
def cli():
    pass


@click.command("demo")
@click.option("--width", type=int, default=320, help="Width of the image to render")
@click.option("--height", type=int, default=240, help="Height of the image to render")
@click.option('--algorithm', type=click.Choice(RENDERERS), default="whitted")
@click.option(
    "--max-depth",
    type=int,
    default=DEFAULT_MAX_DEPTH,
    help="Maximum number of reflections/refractions followed by each ray.",
)
@click.option(
    "--workers",
    type=int,
    default=1,
    help="Number of threads sharing the rows of the image.",
)
@click.option(
    "--ppm-output",
    type=str,
    default="output.ppm",
    help="Name of the PPM file to create",
)
@click.option(
    "--png-output",
    type=str,
    default="",
    help="Name of the PNG file to create (none if empty)",
)
@click.option("--gamma", type=float, default=1.0, help="Exponent for gamma-correction of the PNG file")
@click.option("--verbose", "-v", is_flag=True, help="Print log messages while rendering")
def demo(width, height, algorithm, max_depth, workers, ppm_output, png_output, gamma, verbose):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(asctime)s %(levelname)s] %(message)s")

    try:
        config = RenderConfig(max_depth=max_depth, workers=workers)
        camera = Camera(
            hsize=width,
            vsize=height,
            field_of_view=math.pi / 3,
            transformation=view_transform(point(0.0, 1.8, -6.0), point(0.0, 0.8, 0.0), vector(0.0, 1.0, 0.0)),
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    world = build_demo_world()
    print(f"Generating a {width}×{height} image")

    def print_progress(num_of_rows):
        print(f"Rendering row {num_of_rows}/{height}\r", end="")

    start_time = process_time()
    if algorithm == "whitted":
        print("Using a Whitted ray tracer")
        canvas = render(world, camera, config, callback=print_progress)
    else:
        canvas = Canvas(width, height)
        tracer = ImageTracer(canvas=canvas, camera=camera)
        if algorithm == "onoff":
            print("Using on/off renderer")
            renderer = OnOffRenderer(world=world, config=config)
        else:
            print("Using flat renderer")
            renderer = FlatRenderer(world=world, config=config)

        tracer.fire_all_rays(renderer, callback=print_progress, workers=workers)
    elapsed_time = process_time() - start_time

    print(f"Rendering completed in {elapsed_time:.1f} s")

    with open(ppm_output, "wb") as outf:
        canvas.write_ppm(outf)
    print(f"PPM demo image written to {ppm_output}")

    if png_output:
        with open(png_output, "wb") as outf:
            canvas.write_ldr_image(outf, "PNG", gamma=gamma)
        print(f"PNG demo image written to {png_output}")


cli.add_command(demo)

if __name__ == "__main__":
    cli()
