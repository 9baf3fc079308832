"""Mixed-tag arithmetic that the type checker must reject.

Lines marked with the error marker comment must each produce one error.
"""

from stellare_types import Affine2, Angle, Point2, Point3, Quantity, Vector3
from stellare_types.units import Degrees, Feet, Meters, Radians, Seconds, ViewSpace, WorldSpace

meters = Vector3[Meters](1.0, 2.0, 3.0)
feet = Vector3[Feet](1.0, 2.0, 3.0)

meters + feet  # E
meters - feet  # E
meters.dot(feet)  # E

Point3[Meters](1.0, 2.0, 3.0) + Point3[Meters](4.0, 5.0, 6.0)  # E
Point3[Meters](1.0, 2.0, 3.0) - Point3[Feet](4.0, 5.0, 6.0)  # E

Quantity[Meters](1.0) + Quantity[Seconds](2.0)  # E
Quantity[Meters](1.0) < Quantity[Feet](2.0)  # E
Angle[Degrees](90.0) + Angle[Radians](1.0)  # E

length: Quantity[Feet] = Quantity[Meters](1.0)  # E

camera = Affine2.from_camera(Point2[WorldSpace](0.0, 0.0), Angle[Degrees](0.0), 1.0)
camera.transform_point(Point2[ViewSpace](1.0, 1.0))  # E
