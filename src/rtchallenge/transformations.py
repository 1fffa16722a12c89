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

from math import sin, cos

from rtchallenge.geometry import Tuple, vector
from rtchallenge.misc import are_close

# Pivots smaller than this are considered zero when inverting a matrix
_SINGULAR_THRESHOLD = 1e-12


class NonInvertibleTransform(Exception):
    """Raised when the inverse of a singular matrix is requested"""

    def __init__(self, error_message):
        super().__init__(error_message)


def matrix_product(a, b):
    """Return the product of two 4×4 matrices, represented as lists of lists"""
    result = [[0.0 for i in range(4)] for j in range(4)]
    for i in range(4):
        for j in range(4):
            for k in range(4):
                result[i][j] += a[i][k] * b[k][j]

    return result


def matrix_transpose(m):
    return [[m[j][i] for j in range(4)] for i in range(4)]


def _are_matr_close(m1, m2):
    for i in range(4):
        for j in range(4):
            if not are_close(m1[i][j], m2[i][j]):
                return False

    return True


def _eliminate(m):
    """Run Gauss-Jordan elimination with partial pivoting on a copy of `m`

    Return a pair ``(inverse, determinant)``. The inverse is ``None`` if the matrix is singular."""
    work = [list(row) + [1.0 if i == j else 0.0 for j in range(4)] for i, row in enumerate(m)]
    det = 1.0

    for col in range(4):
        pivot_row = max(range(col, 4), key=lambda r: abs(work[r][col]))
        pivot = work[pivot_row][col]
        if abs(pivot) < _SINGULAR_THRESHOLD:
            return None, 0.0

        if pivot_row != col:
            work[col], work[pivot_row] = work[pivot_row], work[col]
            det = -det

        det *= pivot
        work[col] = [value / pivot for value in work[col]]

        for row in range(4):
            if row == col:
                continue

            factor = work[row][col]
            if factor != 0.0:
                work[row] = [value - factor * pivot_value
                             for value, pivot_value in zip(work[row], work[col])]

    return [row[4:] for row in work], det


def matrix_inverse(m):
    """Return the inverse of a 4×4 matrix

    Raise :class:`.NonInvertibleTransform` if the matrix is singular."""
    inverse, _ = _eliminate(m)
    if inverse is None:
        raise NonInvertibleTransform(f"the matrix {m} is not invertible")

    return inverse


def matrix_determinant(m):
    _, det = _eliminate(m)
    return det


IDENTITY_MATR4x4 = [[1.0, 0.0, 0.0, 0.0],
                    [0.0, 1.0, 0.0, 0.0],
                    [0.0, 0.0, 1.0, 0.0],
                    [0.0, 0.0, 0.0, 1.0]]


class Transformation:
    """An affine transformation.

    This class encodes an affine transformation as a 4×4 matrix `m` together with its inverse `invm`.
    Keeping both makes the calculation of the inverse transformation particularly cheap, which
    matters because every ray is converted into object space before being intersected with a shape.

    Transformations compose through ``*``: in ``a * b``, `b` is applied first and `a` last.
    """

    def __init__(self, m=IDENTITY_MATR4x4, invm=IDENTITY_MATR4x4):
        self.m = m
        self.invm = invm

    @staticmethod
    def from_matrix(m):
        """Build a transformation out of a generic 4×4 matrix, computing its inverse

        Raise :class:`.NonInvertibleTransform` if `m` is singular."""
        return Transformation(m=[list(row) for row in m], invm=matrix_inverse(m))

    def __mul__(self, other):
        if isinstance(other, Tuple):
            row0, row1, row2, row3 = self.m
            return Tuple(x=other.x * row0[0] + other.y * row0[1] + other.z * row0[2] + other.w * row0[3],
                         y=other.x * row1[0] + other.y * row1[1] + other.z * row1[2] + other.w * row1[3],
                         z=other.x * row2[0] + other.y * row2[1] + other.z * row2[2] + other.w * row2[3],
                         w=other.x * row3[0] + other.y * row3[1] + other.z * row3[2] + other.w * row3[3])
        elif isinstance(other, Transformation):
            result_m = matrix_product(self.m, other.m)
            result_invm = matrix_product(other.invm, self.invm)  # Reverse order! (A B)^-1 = B^-1 A^-1
            return Transformation(m=result_m, invm=result_invm)
        else:
            raise TypeError(f"Invalid type {type(other)} multiplied to a Transformation object")

    def transform_normal(self, normal):
        """Apply the transformation to a surface normal

        Normals must be multiplied by the transpose of the inverse matrix, otherwise a
        non-uniform scaling would tilt them. The `w` component of the result is forced to zero,
        and the result is not normalized."""
        row0, row1, row2, _ = self.invm
        return vector(normal.x * row0[0] + normal.y * row1[0] + normal.z * row2[0],
                      normal.x * row0[1] + normal.y * row1[1] + normal.z * row2[1],
                      normal.x * row0[2] + normal.y * row1[2] + normal.z * row2[2])

    def is_consistent(self):
        """Check the internal consistency of the transformation.

        This method is useful when writing tests."""
        prod = matrix_product(self.m, self.invm)
        return _are_matr_close(prod, IDENTITY_MATR4x4)

    def __repr__(self):
        row0, row1, row2, row3 = self.m
        fmtstring = "   [{0:6.3e} {1:6.3e} {2:6.3e} {3:6.3e}],\n"
        result = "[\n"
        result += fmtstring.format(*row0)
        result += fmtstring.format(*row1)
        result += fmtstring.format(*row2)
        result += fmtstring.format(*row3)
        result += "]"
        return result

    def is_close(self, other):
        """Check if `other` represents the same transform."""
        return _are_matr_close(self.m, other.m) and _are_matr_close(self.invm, other.invm)

    def inverse(self):
        """Return a `Transformation` object representing the inverse affine transformation.

        This method is very cheap to call."""
        return Transformation(m=self.invm, invm=self.m)

    def transpose(self):
        return Transformation(m=matrix_transpose(self.m), invm=matrix_transpose(self.invm))

    def determinant(self):
        return matrix_determinant(self.m)


def translation(x, y, z):
    """Return a :class:`.Transformation` object encoding a rigid translation

    The parameters specify the amount of shift to be applied along the three axes."""
    return Transformation(
        m=[[1.0, 0.0, 0.0, x],
           [0.0, 1.0, 0.0, y],
           [0.0, 0.0, 1.0, z],
           [0.0, 0.0, 0.0, 1.0]],
        invm=[[1.0, 0.0, 0.0, -x],
              [0.0, 1.0, 0.0, -y],
              [0.0, 0.0, 1.0, -z],
              [0.0, 0.0, 0.0, 1.0]],
    )


def scaling(x, y, z):
    """Return a :class:`.Transformation` object encoding a scaling

    The parameters specify the amount of scaling along the three directions X, Y, Z. A zero
    factor makes the transformation singular and raises :class:`.NonInvertibleTransform`."""
    if x == 0.0 or y == 0.0 or z == 0.0:
        raise NonInvertibleTransform(f"scaling({x}, {y}, {z}) is not invertible")

    return Transformation(
        m=[[x, 0.0, 0.0, 0.0],
           [0.0, y, 0.0, 0.0],
           [0.0, 0.0, z, 0.0],
           [0.0, 0.0, 0.0, 1.0]],
        invm=[[1 / x, 0.0, 0.0, 0.0],
              [0.0, 1 / y, 0.0, 0.0],
              [0.0, 0.0, 1 / z, 0.0],
              [0.0, 0.0, 0.0, 1.0]],
    )


def rotation_x(angle_rad: float):
    """Return a :class:`.Transformation` object encoding a rotation around the X axis

    The parameter `angle_rad` specifies the rotation angle (in radians). A positive rotation
    brings the Y axis towards the Z axis."""

    sinang, cosang = sin(angle_rad), cos(angle_rad)
    return Transformation(
        m=[[1.0, 0.0, 0.0, 0.0],
           [0.0, cosang, -sinang, 0.0],
           [0.0, sinang, cosang, 0.0],
           [0.0, 0.0, 0.0, 1.0]],
        invm=[[1.0, 0.0, 0.0, 0.0],
              [0.0, cosang, sinang, 0.0],
              [0.0, -sinang, cosang, 0.0],
              [0.0, 0.0, 0.0, 1.0]],
    )


def rotation_y(angle_rad: float):
    """Return a :class:`.Transformation` object encoding a rotation around the Y axis"""
    sinang, cosang = sin(angle_rad), cos(angle_rad)
    return Transformation(
        m=[[cosang, 0.0, sinang, 0.0],
           [0.0, 1.0, 0.0, 0.0],
           [-sinang, 0.0, cosang, 0.0],
           [0.0, 0.0, 0.0, 1.0]],
        invm=[[cosang, 0.0, -sinang, 0.0],
              [0.0, 1.0, 0.0, 0.0],
              [sinang, 0.0, cosang, 0.0],
              [0.0, 0.0, 0.0, 1.0]],
    )


def rotation_z(angle_rad: float):
    """Return a :class:`.Transformation` object encoding a rotation around the Z axis"""
    sinang, cosang = sin(angle_rad), cos(angle_rad)
    return Transformation(
        m=[[cosang, -sinang, 0.0, 0.0],
           [sinang, cosang, 0.0, 0.0],
           [0.0, 0.0, 1.0, 0.0],
           [0.0, 0.0, 0.0, 1.0]],
        invm=[[cosang, sinang, 0.0, 0.0],
              [-sinang, cosang, 0.0, 0.0],
              [0.0, 0.0, 1.0, 0.0],
              [0.0, 0.0, 0.0, 1.0]],
    )


def shearing(xy, xz, yx, yz, zx, zy):
    """Return a :class:`.Transformation` object encoding a shear

    Each parameter tells how much a coordinate moves in proportion to another one: e.g., `xy`
    is the change of `x` in proportion to `y`."""
    return Transformation.from_matrix(
        [[1.0, xy, xz, 0.0],
         [yx, 1.0, yz, 0.0],
         [zx, zy, 1.0, 0.0],
         [0.0, 0.0, 0.0, 1.0]],
    )


def view_transform(from_point, to_point, up):
    """Return the transformation that orients the world relative to an eye

    The eye sits at `from_point` and looks at `to_point`; `up` is a vector pointing roughly
    upwards. A :class:`.DegenerateVector` is raised if the eye and the target coincide."""
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Transformation.from_matrix(
        [[left.x, left.y, left.z, 0.0],
         [true_up.x, true_up.y, true_up.z, 0.0],
         [-forward.x, -forward.y, -forward.z, 0.0],
         [0.0, 0.0, 0.0, 1.0]],
    )
    return orientation * translation(-from_point.x, -from_point.y, -from_point.z)
