## foundational vector and polygon primitives for pathloft
## Copyright (c) 2026 pathloft contributors

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

"""foundational vector primitives for **pathloft**

====================
OVERVIEW
====================

The pathloft.geom module provides the small set of constants and
three-vector operations shared by the planarizer, the loft engine and
the ear-clipping triangulator.

constants
=========

pathloft.geom provides the "constants" ``epsilon`` and ``pi2`` (2*pi).
Redefine these at your peril.  ``epsilon`` is the tolerance used for
zero-length tests (rotation axes, normals) and for the collinearity and
containment tests of the triangulator.

points
======

Points are plain ``(x, y, z)`` tuples of floats.  Any sequence with two
or more numeric components is accepted where a point is expected,
so lists, tuples, numpy rows and homogeneous ``[x, y, z, w]`` vectors
all work; ``point()`` coerces them, dropping any ``w``.  A point has no
identity beyond its position.

paths
=====

A path is an ordered list of points describing a closed polygon: the
last point connects back to the first, and the closing point is *not*
repeated.  Nothing in this module mutates a path passed to it.

"""

from math import acos, pi, sqrt

## constants
epsilon = 0.000005
pi2 = 2.0 * pi


## operations on scalars
## ---------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float))


def close(a, b):
    """ are two scalars the same within epsilon
    """
    return abs(a - b) < epsilon


## operations on points
## --------------------

def point(x, y=None, z=None):
    """Point creation from a point-like sequence or from scalars.

    ``point(1, 2)`` is ``(1.0, 2.0, 0.0)``; ``point([1, 2, 3, 1])`` is
    ``(1.0, 2.0, 3.0)``.
    """
    if y is None and z is None and not isgoodnum(x):
        if len(x) < 2:
            raise ValueError('bad point-like value passed to point(): {}'.format(x))
        zz = x[2] if len(x) > 2 else 0.0
        return (float(x[0]), float(x[1]), float(zz))
    if z is None:
        z = 0.0
    if y is None:
        y = 0.0
    return (float(x), float(y), float(z))


def path(points):
    """Return a private copy of ``points`` as a list of point tuples"""
    return [point(p) for p in points]


def flatten(points):
    """Flatten a list of points into ``[x0, y0, z0, x1, y1, z1, ...]``"""
    flat = []
    for p in points:
        flat.extend((p[0], p[1], p[2]))
    return flat


## R^3 -> R^3 functions
## --------------------

def add(a, b):
    """ 3 vector, `a + b`"""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a, b):
    """ 3 vector, `a - b`"""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale3(a, c):
    """ 3 vector, vector ``a`` times scalar ``c``, `a * c`"""
    return (a[0] * c, a[1] * c, a[2] * c)


def cross(a, b):
    """ 3 vector cross product `a x b`"""
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


## R^3 -> R functions
## ------------------

def dot(a, b):
    """ 3 vector ``a`` dot ``b`` """
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def mag(a):
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def dist(a, b):
    """ compute the euclidean distance between two points ``a`` and ``b``"""
    return mag(sub(a, b))


def vclose(a, b):
    """ are two points the same to within epsilon"""
    return close(dist(a, b), 0.0)


def unit(a):
    """Return ``a`` scaled to unit length.  Raises ``ValueError`` for a
    zero-length vector."""
    m = mag(a)
    if m < epsilon:
        raise ValueError('cannot normalise zero-length vector {}'.format(a))
    return scale3(a, 1.0 / m)


## unsigned angle between two vectors, in radians, on [0, pi].  Zero
## length vectors have no direction; the angle is reported as zero.
def vangle(a, b):
    """ angle in radians between 3 vectors ``a`` and ``b``"""
    ma = mag(a)
    mb = mag(b)
    if ma == 0.0 or mb == 0.0:
        return 0.0
    c = dot(a, b) / (ma * mb)
    return acos(max(-1.0, min(1.0, c)))


## operations on polygons
## ----------------------

## Newell's method.  The result is not normalised: its magnitude is
## twice the area of the (planar) polygon, and it is the zero vector
## for degenerate or symmetric self-intersecting polygons.
def newell(points):
    """ compute the area-weighted normal of a closed polygon"""
    nx = ny = nz = 0.0
    count = len(points)
    for i in range(count):
        cur = points[i]
        nxt = points[(i + 1) % count]
        nx += (cur[1] - nxt[1]) * (cur[2] + nxt[2])
        ny += (cur[2] - nxt[2]) * (cur[0] + nxt[0])
        nz += (cur[0] - nxt[0]) * (cur[1] + nxt[1])
    return (nx, ny, nz)


def bbox2d(points):
    """ XY bounding box of a path as ``((minx, miny), (maxx, maxy))``"""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (min(xs), min(ys)), (max(xs), max(ys))


## triangles
## ---------

def triangle_normal(v0, v1, v2):
    """Return the unit normal of a triangle or ``None`` if degenerate."""
    n = cross(sub(v1, v0), sub(v2, v0))
    length = mag(n)
    if length <= epsilon:
        return None
    return (n[0] / length, n[1] / length, n[2] / length)


def triangle_area(v0, v1, v2):
    """Return the area of a triangle."""
    return 0.5 * mag(cross(sub(v1, v0), sub(v2, v0)))


## positive for counterclockwise triangles in the XY plane
def triangle_area_xy(v0, v1, v2):
    """Return the signed XY area of a triangle."""
    return ((v1[0] - v0[0]) * (v2[1] - v0[1]) -
            (v2[0] - v0[0]) * (v1[1] - v0[1])) / 2.0
