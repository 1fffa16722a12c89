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
from time import perf_counter
from typing import Optional

from rtchallenge.camera import Camera
from rtchallenge.canvas import Canvas
from rtchallenge.colors import Color, WHITE, BLACK
from rtchallenge.config import RenderConfig
from rtchallenge.geometry import Tuple, reflect
from rtchallenge.hitrecord import HitRecord, hit, prepare_computations, schlick
from rtchallenge.imagetracer import ImageTracer
from rtchallenge.lights import PointLight
from rtchallenge.materials import Material
from rtchallenge.ray import Ray
from rtchallenge.world import World

logger = logging.getLogger(__name__)


def lighting(material: Material, shape, light: PointLight, point: Tuple, eyev: Tuple, normalv: Tuple,
             in_shadow: bool = False) -> Color:
    """Compute the color of a point lit by `light` using the Phong reflection model

    The ambient term is always present. The diffuse and specular terms are zero when the point
    is in shadow, or when the light lies behind the surface."""
    effective_color = material.color_at(shape, point) * light.intensity
    ambient = effective_color * material.ambient
    if in_shadow:
        return ambient

    lightv = (light.position - point).normalize()
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)

    reflect_dot_eye = reflect(-lightv, normalv).dot(eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        specular = light.intensity * (material.specular * math.pow(reflect_dot_eye, material.shininess))

    return ambient + diffuse + specular


class Renderer:
    """A class computing the color seen along a ray.

    This is an abstract class; you should use a derived concrete class."""

    def __init__(self, world: World, config: Optional[RenderConfig] = None):
        self.world = world
        self.config = config if config else RenderConfig()

    @property
    def background_color(self) -> Color:
        return self.config.background

    def __call__(self, ray: Ray) -> Color:
        """Estimate the color seen along a ray"""
        raise NotImplementedError("Unable to call Renderer.__call__, it is an abstract method")


class OnOffRenderer(Renderer):
    """A on/off renderer

    This renderer is mostly useful for debugging purposes, as it is really fast, but it produces boring images."""

    def __init__(self, world: World, config: Optional[RenderConfig] = None, color=WHITE):
        super().__init__(world, config)
        self.color = color

    def __call__(self, ray: Ray) -> Color:
        return self.color if self.world.ray_intersection(ray, epsilon=self.config.epsilon) else self.background_color


class FlatRenderer(Renderer):
    """A «flat» renderer

    This renderer ignores lights and shadows: it just uses the color of each surface."""

    def __call__(self, ray: Ray) -> Color:
        the_hit = self.world.ray_intersection(ray, epsilon=self.config.epsilon)
        if not the_hit:
            return self.background_color

        return the_hit.shape.material.color_at(the_hit.shape, ray.at(the_hit.t))


class WhittedRenderer(Renderer):
    """A recursive renderer implementing Phong shading, shadows, reflection and refraction

    The number of bounces followed by each camera ray is limited by ``config.max_depth``: once
    it is exhausted, reflected and refracted rays contribute no light.
    """

    def __call__(self, ray: Ray) -> Color:
        return self.color_at(ray)

    def color_at(self, ray: Ray, remaining: Optional[int] = None) -> Color:
        """Return the color seen along `ray`, following at most `remaining` further bounces"""
        if remaining is None:
            remaining = self.config.max_depth

        xs = self.world.intersect(ray)
        the_hit = hit(xs, epsilon=self.config.epsilon)
        if not the_hit:
            return self.background_color

        record = prepare_computations(the_hit, ray, xs, epsilon=self.config.epsilon)
        return self.shade_hit(record, remaining)

    def shade_hit(self, record: HitRecord, remaining: int) -> Color:
        """Return the color of a hit, summing the contributions of all the lights in the world"""
        material = record.shape.material

        surface = Color()
        for light in self.world.lights:
            in_shadow = self.world.is_shadowed(record.over_point, light, epsilon=self.config.epsilon)
            surface += lighting(material, record.shape, light, record.over_point, record.eyev, record.normal,
                                in_shadow)

        reflected = self.reflected_color(record, remaining)
        refracted = self.refracted_color(record, remaining)

        if material.reflective > 0.0 and material.transparency > 0.0:
            reflectance = schlick(record)
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)

        return surface + reflected + refracted

    def reflected_color(self, record: HitRecord, remaining: int) -> Color:
        """Return the light mirrored by the surface, already scaled by its reflectivity"""
        reflective = record.shape.material.reflective
        if remaining <= 0 or reflective == 0.0:
            return Color()

        reflect_ray = Ray(origin=record.over_point, direction=record.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * reflective

    def refracted_color(self, record: HitRecord, remaining: int) -> Color:
        """Return the light transmitted through the surface, already scaled by its transparency

        Total internal reflection, including grazing angles where Snell's law breaks down
        numerically, transmits no light."""
        transparency = record.shape.material.transparency
        if remaining <= 0 or transparency == 0.0:
            return Color()

        n_ratio = record.n1 / record.n2
        cos_i = record.eyev.dot(record.normal)
        sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
        if math.isnan(sin2_t) or sin2_t > 1.0:
            return Color()

        cos_t = math.sqrt(max(0.0, 1.0 - sin2_t))
        direction = record.normal * (n_ratio * cos_i - cos_t) - record.eyev * n_ratio
        refract_ray = Ray(origin=record.under_point, direction=direction)

        return self.color_at(refract_ray, remaining - 1) * transparency


def render(world: World, camera: Camera, config: Optional[RenderConfig] = None, callback=None,
           **callback_kwargs) -> Canvas:
    """Render `world` as seen by `camera` and return the image

    The same world, camera and configuration always produce the same image, regardless of the
    number of workers. The optional `callback` is passed to :meth:`.ImageTracer.fire_all_rays`."""
    if not config:
        config = RenderConfig()

    canvas = Canvas(camera.hsize, camera.vsize)
    tracer = ImageTracer(canvas=canvas, camera=camera)
    renderer = WhittedRenderer(world, config)

    logger.info("rendering %d×%d pixels with %d shape(s), %d light(s), maximum depth %d, %d worker(s)",
                canvas.width, canvas.height, len(world.shapes), len(world.lights), config.max_depth,
                config.workers)
    if not world.lights:
        logger.warning("the world contains no lights")

    start = perf_counter()
    tracer.fire_all_rays(renderer, callback=callback, workers=config.workers, **callback_kwargs)
    logger.debug("rendering completed in %.2f s", perf_counter() - start)

    return canvas
