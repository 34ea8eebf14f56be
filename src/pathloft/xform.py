## rotation matrices for planarizing pathloft paths

## Copyright (c) 2026 pathloft contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from math import acos, cos, sin

import numpy as np

import pathloft.geom as geom

## Paths only ever need rigid rotations about the origin, so matrices
## here are plain 3x3 numpy arrays rather than homogeneous 4x4
## transforms.  Points are treated as row vectors: a path of N points
## is an (N, 3) array P and the rotated path is P @ R.T


# return the 3x3 arbitrary axis rotation matrix.  ``angle`` is in
# radians
def Rotation(axis, angle, inverse=False):
    m = geom.mag(axis)
    u = axis
    if m < geom.epsilon:
        raise ValueError('zero-length rotation axis not allowed')
    if not geom.close(m, 1.0):
        u = geom.scale3(axis, 1.0 / m)

    if inverse:
        angle *= -1.0

    ux = u[0]
    uy = u[1]
    uz = u[2]

    cang = cos(angle)
    cmin = 1.0 - cang
    sang = sin(angle)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux*ux*cmin, ux*uy*cmin - uz*sang, ux*uz*cmin + uy*sang],
         [uy*ux*cmin + uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang],
         [uz*ux*cmin - uy*sang, uz*uy*cmin + ux*sang, cang + uz*uz*cmin]]

    return np.array(R, dtype=float)


## rotation taking unit vector ``a`` onto unit vector ``b``.  Returns
## None when the two are parallel or anti-parallel, since the rotation
## axis is then undefined.
def Alignment(a, b):
    axis = geom.cross(a, b)
    if geom.mag(axis) < geom.epsilon:
        return None
    angle = acos(max(-1.0, min(1.0, geom.dot(a, b))))
    return Rotation(axis, angle)


def transform(matrix, points):
    """apply a 3x3 matrix to every point of ``points``, returning a new
    list of point tuples"""
    if not points:
        return []
    arr = np.asarray(points, dtype=float) @ np.asarray(matrix).T
    return [(float(x), float(y), float(z)) for x, y, z in arr]
